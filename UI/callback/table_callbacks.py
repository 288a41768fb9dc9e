"""
Table-local UI: column visibility, row action menus and the click-away
overlay. Only the TABLE_STATE store is written here; the entity render
callback picks the change up from there.
"""

from typing import Any, Dict, Optional

from dash import ALL, MATCH, Input, Output, State, callback_context
from dash.exceptions import PreventUpdate

from UI.app import app
from UI.pages.entity.ids import EntityIds
from UI.screens import SCREENS
from UI.state import table_state as ts


def apply_table_intent(resource: str, trigger: Dict[str, Any], value: Any,
                       data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    New TABLE_STATE store data for one triggered input, or None when the
    state does not change.
    """
    columns = SCREENS[resource].columns
    current = ts.TableViewState.from_dict(data, columns)
    kind = trigger.get('type')

    if kind == EntityIds.COLUMN_CHECKLIST:
        updated = ts.set_visible_columns(current, value or [], columns)
    elif not value:
        # Click components that were just rendered report 0 or None
        return None
    elif kind == EntityIds.COLUMN_FILTER_BUTTON:
        updated = ts.toggle_filter_panel(current)
    elif kind == EntityIds.ROW_MENU:
        updated = ts.toggle_menu(current, trigger.get('index'))
    elif kind == EntityIds.OVERLAY_BACKDROP:
        updated = ts.dismiss_overlays(current)
    elif kind in (EntityIds.ROW_ACTION, EntityIds.ROW_CUSTOM_ACTION):
        # Choosing an action closes its menu
        updated = ts.close_menu(current)
    else:
        return None

    if updated == current:
        return None
    return updated.to_dict()


@app.callback(
    Output({'type': EntityIds.TABLE_STATE, 'resource': MATCH}, 'data'),
    [Input({'type': EntityIds.COLUMN_FILTER_BUTTON, 'resource': MATCH}, 'n_clicks'),
     Input({'type': EntityIds.COLUMN_CHECKLIST, 'resource': MATCH, 'index': ALL}, 'value'),
     Input({'type': EntityIds.ROW_MENU, 'resource': MATCH, 'index': ALL}, 'n_clicks'),
     Input({'type': EntityIds.OVERLAY_BACKDROP, 'resource': MATCH, 'index': ALL}, 'n_clicks'),
     Input({'type': EntityIds.ROW_ACTION, 'resource': MATCH, 'index': ALL, 'action': ALL}, 'n_clicks'),
     Input({'type': EntityIds.ROW_CUSTOM_ACTION, 'resource': MATCH, 'index': ALL, 'action': ALL}, 'n_clicks')],
    [State({'type': EntityIds.MOUNT, 'resource': MATCH}, 'data'),
     State({'type': EntityIds.TABLE_STATE, 'resource': MATCH}, 'data')],
    prevent_initial_call=True,
)
def handle_table_ui(filter_clicks, checklist, menu_clicks, backdrop_clicks, action_clicks,
                    custom_clicks, resource, data):
    ctx = callback_context
    trigger = ctx.triggered_id
    if not ctx.triggered or not isinstance(trigger, dict) or resource not in SCREENS:
        raise PreventUpdate

    updated = apply_table_intent(resource, trigger, ctx.triggered[0]['value'], data)
    if updated is None:
        raise PreventUpdate
    return updated
