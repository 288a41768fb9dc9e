"""
Entity Table View

Generic table for every resource screen. It renders what the entity
controller hands it and reports user intents back through component ids;
it never calls the API.

The view is split in two:

- a static shell (search box, column filter button, placeholders) created once
  per page, so typing in the search box is never interrupted by a re-render
- dynamic parts (column panel, table body, click-away overlay) rendered from
  the controller state and the table-local TableViewState

Behaviour:
- empty collection and empty search result show different messages
- text cells of columns with ``max_length`` are truncated; component cells are
  left alone
- at most one row action menu is open; order is custom actions, View, Edit,
  Delete
- the last visible column cannot be hidden (its checkbox is disabled)
- while a menu or the column panel is open, a transparent overlay covers the
  page; clicking it closes both
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from UI.constants import (
    ACTION_DELETE,
    ACTION_EDIT,
    ACTION_VIEW,
    ACTIONS_HEADER,
    COLUMN_FILTER_LABEL,
    COLUMN_PANEL_TITLE,
    ROW_ACTION_LABELS,
    SEARCH_PLACEHOLDER,
)
from UI.pages.entity.ids import SINGLE, EntityIds, component_id
from UI.state.table_state import ColumnSpec, TableViewState, is_column_locked, visible_column_specs
from UI.utils.text_utils import truncate_text

Entity = Dict[str, Any]

# Plain values that may be truncated; anything else is a component.
TEXT_TYPES = (str, int, float)


@dataclass(frozen=True)
class CustomAction:
    """
    Extra row action shown before View/Edit/Delete.

    ``handler(entity, controller)`` runs when the action is chosen.
    """
    key: str
    label: str
    handler: Callable[[Entity, Any], None]
    icon: Optional[str] = None


def render_cell(column: ColumnSpec, entity: Entity) -> Any:
    rendered = column.render(entity)
    if rendered is None:
        return ""
    if isinstance(rendered, bool):
        return str(rendered)
    if column.max_length and isinstance(rendered, TEXT_TYPES):
        return truncate_text(str(rendered), column.max_length)
    return rendered


# ---------------------------------------------------------------------------
# Static shell
# ---------------------------------------------------------------------------

def build_entity_table(resource: str, show_search: bool = True) -> html.Div:
    """
    Create the table shell for one resource page.

    Args:
        resource: resource key used to scope component ids
        show_search: render the search box and column filter button

    Returns:
        html.Div: shell with placeholders filled by the render callback
    """
    controls = []
    if show_search:
        controls = [html.Div([
            html.Div([
                html.I(className="fas fa-search search-icon"),
                dbc.Input(
                    id=component_id(EntityIds.SEARCH, resource),
                    type="text",
                    placeholder=SEARCH_PLACEHOLDER,
                    value="",
                    className="search-input",
                ),
            ], className="search-container"),
            html.Div([
                dbc.Button(
                    html.I(className="fas fa-sliders-h"),
                    id=component_id(EntityIds.COLUMN_FILTER_BUTTON, resource),
                    color="link",
                    className="filter-button",
                    title=COLUMN_FILTER_LABEL,
                    n_clicks=0,
                ),
                html.Div(id=component_id(EntityIds.COLUMN_PANEL, resource)),
            ], className="column-filter-anchor"),
        ], className="table-controls")]

    return html.Div(controls + [
        dcc.Store(id=component_id(EntityIds.TABLE_STATE, resource)),
        html.Div(id=component_id(EntityIds.OVERLAY, resource)),
        html.Div(id=component_id(EntityIds.TABLE_BODY, resource)),
    ], className="table-container")


# ---------------------------------------------------------------------------
# Dynamic parts
# ---------------------------------------------------------------------------

def render_column_panel(resource: str, columns: Sequence[ColumnSpec],
                        table_state: TableViewState) -> Optional[html.Div]:
    if not table_state.filter_open:
        return None

    options = [
        {
            "label": column.label,
            "value": column.key,
            "disabled": is_column_locked(table_state, column.key),
        }
        for column in columns
    ]
    return html.Div([
        html.Div(html.Strong(COLUMN_PANEL_TITLE), className="column-filter-header"),
        dcc.Checklist(
            id=component_id(EntityIds.COLUMN_CHECKLIST, resource, index=SINGLE),
            options=options,
            value=list(table_state.visible_columns),
            className="column-filter-list",
            labelClassName="column-filter-item",
        ),
    ], className="column-filter-menu")


def render_overlay(resource: str, table_state: TableViewState) -> Optional[html.Div]:
    """Click-away layer, present only while a menu or the column panel is open."""
    if not table_state.has_overlay:
        return None
    return html.Div(
        id=component_id(EntityIds.OVERLAY_BACKDROP, resource, index=SINGLE),
        className="overlay-backdrop",
        n_clicks=0,
    )


def render_row_actions(resource: str, entity: Entity, entity_id: int, entity_name: str,
                       is_open: bool, custom_actions: Sequence[CustomAction] = ()) -> html.Div:
    trigger = html.Button(
        html.I(className="fas fa-ellipsis-v"),
        id=component_id(EntityIds.ROW_MENU, resource, index=entity_id),
        className="actions-menu-trigger",
        title=f"Actions for {entity_name}",
        n_clicks=0,
        **{"aria-label": f"Actions for {entity_name}", "aria-expanded": "true" if is_open else "false"},
    )
    children = [trigger]

    if is_open:
        items = []
        for action in custom_actions:
            label = [html.Span(action.label)]
            if action.icon:
                label.insert(0, html.I(className=f"{action.icon} me-2"))
            items.append(html.Button(
                label,
                id=component_id(EntityIds.ROW_CUSTOM_ACTION, resource, index=entity_id, action=action.key),
                className="actions-menu-item btn-custom",
                n_clicks=0,
            ))
        for action in (ACTION_VIEW, ACTION_EDIT, ACTION_DELETE):
            label, icon = ROW_ACTION_LABELS[action]
            items.append(html.Button(
                [html.I(className=f"{icon} me-2"), html.Span(label)],
                id=component_id(EntityIds.ROW_ACTION, resource, index=entity_id, action=action),
                className=f"actions-menu-item btn-{action}",
                n_clicks=0,
            ))
        children.append(html.Div(items, className="actions-menu"))

    return html.Div(children, className="actions-menu-container open" if is_open else "actions-menu-container")


def render_table_body(
    resource: str,
    *,
    entities: Sequence[Entity],
    filtered: Sequence[Entity],
    selected_ids: Sequence[int],
    all_selected: bool,
    indeterminate: bool,
    columns: Sequence[ColumnSpec],
    table_state: TableViewState,
    entity_id: Callable[[Entity], int],
    entity_name: Callable[[Entity], str],
    empty_message: str,
    empty_search_message: str,
    select_all_label: str,
    custom_actions: Sequence[CustomAction] = (),
) -> html.Div:
    """
    Render the empty state or the table rows.

    ``entities`` is only consulted to tell "nothing registered" apart from
    "nothing matches the search"; ``filtered`` is what gets rendered.
    """
    if not entities:
        return html.Div(html.P(empty_message), className="empty-state")
    if not filtered:
        return html.Div(html.P(empty_search_message), className="empty-state")

    visible = visible_column_specs(columns, table_state)
    selected = set(selected_ids)

    header_cells = [html.Th(
        dbc.Checkbox(
            id=component_id(EntityIds.SELECT_ALL, resource, index=SINGLE),
            value=all_selected,
            input_class_name="indeterminate" if indeterminate else None,
            label_class_name="visually-hidden",
            label=select_all_label,
        ),
        className="checkbox-column",
    )]
    for column in visible:
        header_cells.append(html.Th(column.label, className="sortable" if column.sortable else None))
    header_cells.append(html.Th(ACTIONS_HEADER, className="actions-column"))

    rows = []
    for entity in filtered:
        eid = entity_id(entity)
        name = entity_name(entity)
        cells = [html.Td(
            dbc.Checkbox(
                id=component_id(EntityIds.ROW_SELECT, resource, index=eid),
                value=eid in selected,
                label=f"Select {name}",
                label_class_name="visually-hidden",
            ),
            className="checkbox-column",
        )]
        for column in visible:
            content = render_cell(column, entity)
            cells.append(html.Td(
                content,
                className=None if isinstance(content, str) else "component-cell",
            ))
        cells.append(html.Td(
            render_row_actions(resource, entity, eid, name,
                               is_open=table_state.open_menu_id == eid,
                               custom_actions=custom_actions),
            className="actions-column",
        ))
        rows.append(html.Tr(cells, key=str(eid)))

    return html.Div(
        dbc.Table([html.Thead(html.Tr(header_cells)), html.Tbody(rows)],
                  className="data-table", hover=True),
    )
