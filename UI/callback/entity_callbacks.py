"""
Callbacks wiring the resource screens to their entity controllers.

Three callbacks per screen, all pattern-matched on ``resource``:

- load_on_mount: first render of a screen resets its view and loads the data
- handle_entity_intents: every user intent that changes controller state
- render_entity_screen: redraws table, dialogs and messages from the
  controller state whenever data, intents or table-local state change

Intents never return components; they bump a version counter and the render
callback does the drawing. The intent logic lives in plain functions so it can
be exercised without a running Dash app.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from dash import ALL, MATCH, Input, Output, State, callback_context, no_update
from dash.exceptions import PreventUpdate

from UI.app import app
from UI.components.entity_detail_modal import render_detail_fields
from UI.components.entity_form_modal import collect_form_data, render_form_fields, submit_label
from UI.components.entity_table import render_column_panel, render_overlay, render_table_body
from UI.components.shared import error_message, loading_state
from UI.constants import ACTION_DELETE, ACTION_EDIT, ACTION_VIEW
from UI.pages.entity.ids import EntityIds
from UI.screens import SCREENS
from UI.state.entity_controller import EntityController
from UI.state.entity_state import ModalMode
from UI.state.registry import registry
from UI.state.table_state import TableViewState

logger = logging.getLogger(__name__)


def _match(kind: str, **keys) -> Dict[str, Any]:
    pattern = {'type': kind, 'resource': MATCH}
    pattern.update(keys)
    return pattern


# ---------------------------------------------------------------------------
# Intent handling (no Dash context needed)
# ---------------------------------------------------------------------------

def prepare_screen(resource: str) -> EntityController:
    """Fresh view of a screen: no search, no open dialog, then reload."""
    controller = registry.get(resource)
    controller.set_search_term("")
    if controller.state.modal != ModalMode.CLOSED:
        controller.cancel()
    if controller.state.pending_delete:
        controller.dismiss_delete()
    controller.refresh()
    return controller


def apply_entity_intent(resource: str, trigger: Dict[str, Any], prop: str, value: Any,
                        form_ids: Sequence[Dict[str, Any]] = (),
                        form_values: Sequence[Any] = ()) -> bool:
    """
    Route one triggered input to the controller.

    Args:
        resource: screen key
        trigger: pattern-matching id of the component that fired
        prop: property that fired (e.g. 'n_clicks', 'submit_n_clicks')
        value: new value of that property
        form_ids: ids of the rendered form widgets
        form_values: their values, aligned with ``form_ids``

    Returns:
        bool: True if the controller state may have changed
    """
    screen = SCREENS[resource]
    controller = registry.get(resource)
    state = controller.state
    kind = trigger.get('type')

    if kind == EntityIds.SEARCH:
        term = value or ""
        if term == state.search_term:
            return False
        controller.set_search_term(term)
        return True

    if kind == EntityIds.SELECT_ALL:
        checked = bool(value)
        if checked == controller.all_selected:
            return False
        controller.toggle_all(checked)
        return True

    if kind == EntityIds.ROW_SELECT:
        entity_id = trigger.get('index')
        if bool(value) == (entity_id in state.selected_ids):
            return False
        controller.toggle_one(entity_id)
        return True

    # Everything below is a click; a zero or missing count means the
    # component was just rendered.
    if not value:
        return False

    if kind == EntityIds.NEW_BUTTON:
        controller.begin_create()
        return True

    if kind == EntityIds.FORM_SUBMIT:
        if not state.show_form:
            return False
        controller.set_form_data(collect_form_data(screen.form_fields, form_ids, form_values,
                                                   base=state.form_data))
        controller.submit(value)
        return True

    if kind == EntityIds.FORM_CANCEL:
        controller.cancel()
        return True

    if kind == EntityIds.DETAIL_CLOSE:
        controller.close_view()
        return True

    if kind == EntityIds.CONFIRM_DELETE:
        if prop == 'submit_n_clicks':
            controller.confirm_delete()
        else:
            controller.dismiss_delete()
        return True

    if kind in (EntityIds.ROW_ACTION, EntityIds.ROW_CUSTOM_ACTION):
        entity = controller.find(trigger.get('index'))
        if entity is None:
            logger.warning("Row action on unknown %s id %s", resource, trigger.get('index'))
            return False
        return _row_action(screen, controller, kind, trigger.get('action'), entity)

    logger.debug("Unhandled trigger %s on %s", trigger, resource)
    return False


def _row_action(screen, controller: EntityController, kind: str, action: str, entity) -> bool:
    if kind == EntityIds.ROW_CUSTOM_ACTION:
        for custom in screen.custom_actions:
            if custom.key == action:
                custom.handler(entity, controller)
                return True
        logger.warning("Unknown custom action %r on %s", action, screen.key)
        return False

    if action == ACTION_VIEW:
        controller.view(entity)
    elif action == ACTION_EDIT:
        controller.begin_edit(entity, screen.map_to_form)
    elif action == ACTION_DELETE:
        controller.request_delete(screen.entity_id(entity), screen.entity_name(entity))
    else:
        return False
    return True


# ---------------------------------------------------------------------------
# Rendering (no Dash context needed)
# ---------------------------------------------------------------------------

def render_screen(resource: str, table_data: Optional[Dict[str, Any]],
                  form_was_open: bool = False) -> Dict[str, Any]:
    """
    Everything the render callback outputs, keyed by output name.

    The form body is only rebuilt when the dialog opens, so a draft being
    typed is not overwritten by unrelated re-renders.
    """
    screen = SCREENS[resource]
    controller = registry.get(resource)
    state = controller.state
    table_state = TableViewState.from_dict(table_data, screen.columns)

    if state.error:
        status = error_message(state.error)
    elif state.loading and not state.entities:
        status = loading_state(screen.loading_message)
    else:
        status = None

    table_body = render_table_body(
        resource,
        entities=state.entities,
        filtered=controller.filtered,
        selected_ids=state.selected_ids,
        all_selected=controller.all_selected,
        indeterminate=controller.indeterminate,
        columns=screen.columns,
        table_state=table_state,
        entity_id=screen.entity_id,
        entity_name=screen.entity_name,
        empty_message=screen.empty_message,
        empty_search_message=screen.empty_search_message,
        select_all_label=screen.select_all_label,
        custom_actions=screen.custom_actions,
    )

    editing = state.editing_entity is not None
    if state.show_form and not form_was_open:
        form_body = render_form_fields(resource, screen.form_fields, state.form_data)
    elif state.show_form:
        form_body = no_update
    else:
        form_body = []

    viewing = state.viewing_entity
    return {
        'table_body': table_body,
        'column_panel': render_column_panel(resource, screen.columns, table_state),
        'overlay': render_overlay(resource, table_state),
        'status': status,
        'form_open': state.show_form,
        'form_title': screen.edit_title if editing else screen.create_title,
        'form_body': form_body,
        'submit_label': submit_label(editing),
        'submit_disabled': bool(state.in_flight),
        'detail_open': viewing is not None,
        'detail_title': screen.detail_title,
        'detail_body': render_detail_fields(screen.detail_fields, viewing),
        'confirm_open': state.pending_delete is not None,
        'confirm_message': controller.delete_prompt(state.pending_delete["name"]) if state.pending_delete else "",
    }


RENDER_OUTPUTS = [
    ('table_body', EntityIds.TABLE_BODY, 'children'),
    ('column_panel', EntityIds.COLUMN_PANEL, 'children'),
    ('overlay', EntityIds.OVERLAY, 'children'),
    ('status', EntityIds.ERROR, 'children'),
    ('form_open', EntityIds.FORM_MODAL, 'is_open'),
    ('form_title', EntityIds.FORM_TITLE, 'children'),
    ('form_body', EntityIds.FORM_BODY, 'children'),
    ('submit_label', EntityIds.FORM_SUBMIT, 'children'),
    ('submit_disabled', EntityIds.FORM_SUBMIT, 'disabled'),
    ('detail_open', EntityIds.DETAIL_MODAL, 'is_open'),
    ('detail_title', EntityIds.DETAIL_TITLE, 'children'),
    ('detail_body', EntityIds.DETAIL_BODY, 'children'),
    ('confirm_open', EntityIds.CONFIRM_DELETE, 'displayed'),
    ('confirm_message', EntityIds.CONFIRM_DELETE, 'message'),
]


# ---------------------------------------------------------------------------
# Dash callbacks
# ---------------------------------------------------------------------------

@app.callback(
    Output(_match(EntityIds.LOAD_VERSION), 'data'),
    Input(_match(EntityIds.MOUNT), 'data'),
    State(_match(EntityIds.LOAD_VERSION), 'data'),
)
def load_on_mount(resource, version):
    if not resource or resource not in SCREENS:
        raise PreventUpdate
    prepare_screen(resource)
    return (version or 0) + 1


@app.callback(
    Output(_match(EntityIds.INTENT_VERSION), 'data'),
    [Input(_match(EntityIds.SEARCH), 'value'),
     Input(_match(EntityIds.NEW_BUTTON), 'n_clicks'),
     Input(_match(EntityIds.FORM_SUBMIT), 'n_clicks'),
     Input(_match(EntityIds.FORM_CANCEL), 'n_clicks'),
     Input(_match(EntityIds.DETAIL_CLOSE), 'n_clicks'),
     Input(_match(EntityIds.CONFIRM_DELETE), 'submit_n_clicks'),
     Input(_match(EntityIds.CONFIRM_DELETE), 'cancel_n_clicks'),
     Input(_match(EntityIds.SELECT_ALL, index=ALL), 'value'),
     Input(_match(EntityIds.ROW_SELECT, index=ALL), 'value'),
     Input(_match(EntityIds.ROW_ACTION, index=ALL, action=ALL), 'n_clicks'),
     Input(_match(EntityIds.ROW_CUSTOM_ACTION, index=ALL, action=ALL), 'n_clicks')],
    [State(_match(EntityIds.FORM_FIELD, field=ALL), 'value'),
     State(_match(EntityIds.FORM_FIELD, field=ALL), 'id'),
     State(_match(EntityIds.MOUNT), 'data'),
     State(_match(EntityIds.INTENT_VERSION), 'data')],
    prevent_initial_call=True,
)
def handle_entity_intents(*args):
    form_values, form_ids, resource, version = args[-4:]
    ctx = callback_context
    trigger = ctx.triggered_id
    if not ctx.triggered or not isinstance(trigger, dict) or not resource:
        raise PreventUpdate

    prop = ctx.triggered[0]['prop_id'].rsplit('.', 1)[-1]
    value = ctx.triggered[0]['value']
    if not apply_entity_intent(resource, trigger, prop, value, form_ids, form_values):
        raise PreventUpdate
    return (version or 0) + 1


@app.callback(
    [Output(_match(kind), prop) for _, kind, prop in RENDER_OUTPUTS],
    [Input(_match(EntityIds.LOAD_VERSION), 'data'),
     Input(_match(EntityIds.INTENT_VERSION), 'data'),
     Input(_match(EntityIds.TABLE_STATE), 'data')],
    [State(_match(EntityIds.MOUNT), 'data'),
     State(_match(EntityIds.FORM_MODAL), 'is_open')],
)
def render_entity_screen(load_version, intent_version, table_data, resource, form_was_open):
    if not resource or resource not in SCREENS:
        raise PreventUpdate
    rendered = render_screen(resource, table_data, bool(form_was_open))
    return [rendered[name] for name, _, _ in RENDER_OUTPUTS]
