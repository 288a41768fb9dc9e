"""
Layout of a resource screen (properties, tenants, leases, payments).

Everything here is static; the entity callbacks fill the placeholders from
the screen's controller.
"""

from dash import dcc, html

from UI.components.entity_detail_modal import build_detail_modal
from UI.components.entity_form_modal import build_form_modal
from UI.components.entity_table import build_entity_table
from UI.components.shared import loading_state, page_header
from UI.pages.entity.ids import EntityIds, component_id
from UI.screens import ResourceScreen


def create_resource_layout(screen: ResourceScreen) -> html.Div:
    resource = screen.key
    return html.Div([
        # Mount marker: its first render triggers the initial load
        dcc.Store(id=component_id(EntityIds.MOUNT, resource), data=resource),
        dcc.Store(id=component_id(EntityIds.LOAD_VERSION, resource), data=0),
        dcc.Store(id=component_id(EntityIds.INTENT_VERSION, resource), data=0),

        page_header(screen.title, screen.new_button_label,
                    component_id(EntityIds.NEW_BUTTON, resource)),
        html.Div(loading_state(screen.loading_message), id=component_id(EntityIds.ERROR, resource)),
        build_entity_table(resource),

        build_form_modal(resource),
        build_detail_modal(resource),
        dcc.ConfirmDialog(id=component_id(EntityIds.CONFIRM_DELETE, resource), message=""),
    ], className=f"entity-page {resource}-page")
