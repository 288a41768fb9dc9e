"""
Read-only detail dialog for a single entity.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import dash_bootstrap_components as dbc
from dash import html

from UI.constants import CLOSE_BUTTON_LABEL
from UI.pages.entity.ids import EntityIds, component_id


@dataclass(frozen=True)
class DetailField:
    key: str
    label: str
    render: Optional[Callable[[Any], Any]] = None


def build_detail_modal(resource: str) -> dbc.Modal:
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle(id=component_id(EntityIds.DETAIL_TITLE, resource)), close_button=False),
        dbc.ModalBody(id=component_id(EntityIds.DETAIL_BODY, resource)),
        dbc.ModalFooter(
            dbc.Button(
                CLOSE_BUTTON_LABEL,
                id=component_id(EntityIds.DETAIL_CLOSE, resource),
                color="secondary",
                n_clicks=0,
            )
        ),
    ],
    id=component_id(EntityIds.DETAIL_MODAL, resource),
    size="lg",
    is_open=False)


def render_detail_fields(fields: Sequence[DetailField], entity: Optional[Dict[str, Any]]) -> List[html.Div]:
    if not entity:
        return []
    rows = []
    for detail in fields:
        value = entity.get(detail.key)
        shown = detail.render(value) if detail.render else value
        if shown is None or shown == "":
            shown = "-"
        elif isinstance(shown, bool):
            shown = str(shown)
        rows.append(html.Div([
            html.Div(detail.label, className="detail-label"),
            html.Div(shown, className="detail-value"),
        ], className="detail-row"))
    return rows
