"""
Table-local UI state for the entity table: which columns are visible, which
row's action menu is open, and whether the column panel is open.

This state belongs to the table alone; the entity controller never sees it.
It lives in a dcc.Store next to the table, so it is kept as a plain,
serialisable dataclass with pure transitions.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ColumnSpec:
    """
    One configured table column.

    Args:
        key: stable column key
        label: header text
        render: ``entity -> displayable`` (text or a Dash component)
        sortable: marks the header as sortable
        max_length: truncate rendered text to this many characters
    """
    key: str
    label: str
    render: Callable[[Dict[str, Any]], Any]
    sortable: bool = False
    max_length: Optional[int] = None


@dataclass(frozen=True)
class TableViewState:
    visible_columns: Tuple[str, ...] = ()
    open_menu_id: Optional[int] = None
    filter_open: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visible_columns": list(self.visible_columns),
            "open_menu_id": self.open_menu_id,
            "filter_open": self.filter_open,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], columns: Sequence[ColumnSpec]) -> "TableViewState":
        if not data:
            return initial(columns)
        known = [c.key for c in columns]
        visible = tuple(k for k in data.get("visible_columns", []) if k in known)
        if not visible:
            visible = tuple(known)
        return cls(
            visible_columns=visible,
            open_menu_id=data.get("open_menu_id"),
            filter_open=bool(data.get("filter_open", False)),
        )

    @property
    def has_overlay(self) -> bool:
        return self.filter_open or self.open_menu_id is not None


def initial(columns: Sequence[ColumnSpec]) -> TableViewState:
    return TableViewState(visible_columns=tuple(c.key for c in columns))


def is_column_locked(state: TableViewState, key: str) -> bool:
    """The last visible column cannot be hidden."""
    return len(state.visible_columns) == 1 and key in state.visible_columns


def toggle_column(state: TableViewState, key: str, columns: Sequence[ColumnSpec]) -> TableViewState:
    """Show or hide a column. Hiding the last visible one is a no-op."""
    if key in state.visible_columns:
        if is_column_locked(state, key):
            return state
        visible = tuple(k for k in state.visible_columns if k != key)
    else:
        wanted = set(state.visible_columns) | {key}
        visible = tuple(c.key for c in columns if c.key in wanted)
    return replace(state, visible_columns=visible)


def set_visible_columns(state: TableViewState, keys: Sequence[str],
                        columns: Sequence[ColumnSpec]) -> TableViewState:
    """
    Apply a whole checklist value at once. An empty selection is refused and
    the current set is kept.
    """
    wanted = set(keys or [])
    visible = tuple(c.key for c in columns if c.key in wanted)
    if not visible:
        return state
    return replace(state, visible_columns=visible)


def toggle_menu(state: TableViewState, entity_id: int) -> TableViewState:
    """Open a row's action menu, closing any other. Same row again closes it."""
    if state.open_menu_id == entity_id:
        return replace(state, open_menu_id=None)
    return replace(state, open_menu_id=entity_id)


def close_menu(state: TableViewState) -> TableViewState:
    return replace(state, open_menu_id=None)


def toggle_filter_panel(state: TableViewState) -> TableViewState:
    if state.filter_open:
        return replace(state, filter_open=False)
    return replace(state, filter_open=True, open_menu_id=None)


def dismiss_overlays(state: TableViewState) -> TableViewState:
    """Outside click: close the action menu and the column panel."""
    return replace(state, open_menu_id=None, filter_open=False)


def visible_column_specs(columns: Sequence[ColumnSpec], state: TableViewState) -> List[ColumnSpec]:
    visible = set(state.visible_columns)
    return [c for c in columns if c.key in visible]
