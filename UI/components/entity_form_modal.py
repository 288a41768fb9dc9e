"""
Create/edit dialog shared by every resource screen.

The modal shell is created once per page. Field widgets are rendered from
the controller's form data whenever the dialog opens, and read back as a
whole when the user submits.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import dash_bootstrap_components as dbc
from dash import html

from UI.constants import CANCEL_BUTTON_LABEL, CREATE_BUTTON_LABEL, UPDATE_BUTTON_LABEL
from UI.pages.entity.ids import EntityIds, component_id

FIELD_TYPES = {"text", "email", "textarea", "number", "date", "select", "checkbox"}

Options = List[Dict[str, Any]]


@dataclass(frozen=True)
class FormField:
    """
    One input of the create/edit form.

    ``options`` (select fields) may be a list of ``{"label", "value"}`` dicts
    or a callable returning one, for options that depend on loaded data.
    """
    key: str
    label: str
    type: str = "text"
    required: bool = False
    placeholder: Optional[str] = None
    options: Union[Options, Callable[[], Options], None] = None
    step: Optional[str] = None

    def __post_init__(self):
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unsupported form field type: {self.type}")

    def resolve_options(self) -> Options:
        if self.options is None:
            return []
        if callable(self.options):
            return list(self.options())
        return list(self.options)


def coerce_field_value(form_field: FormField, value: Any) -> Any:
    """Convert a raw widget value into the type the API expects."""
    if form_field.type == "checkbox":
        return bool(value)
    if form_field.type == "number":
        if value in (None, ""):
            return 0
        number = float(value)
        return int(number) if number.is_integer() and form_field.step in (None, "1") else number
    if form_field.type == "select":
        option_values = [o["value"] for o in form_field.resolve_options()]
        if option_values and all(isinstance(v, int) for v in option_values):
            try:
                return int(value)
            except (TypeError, ValueError):
                return 0
        return value if value is not None else ""
    return value if value is not None else ""


def collect_form_data(fields: Sequence[FormField], ids: Sequence[Dict[str, Any]],
                      values: Sequence[Any], base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Read the rendered widgets back into a form-data dict.

    Args:
        fields: configured form fields
        ids: pattern-matching ids of the rendered widgets (carry ``field``)
        values: widget values, aligned with ``ids``
        base: current form data; keys without a widget are kept

    Returns:
        dict: form data with coerced values
    """
    by_key = {f.key: f for f in fields}
    data = dict(base or {})
    for cid, value in zip(ids, values):
        key = cid.get("field")
        if key in by_key:
            data[key] = coerce_field_value(by_key[key], value)
    return data


def build_form_modal(resource: str) -> dbc.Modal:
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle(id=component_id(EntityIds.FORM_TITLE, resource)), close_button=False),
        dbc.ModalBody(html.Div(id=component_id(EntityIds.FORM_BODY, resource), className="form-grid")),
        dbc.ModalFooter([
            dbc.Button(
                CREATE_BUTTON_LABEL,
                id=component_id(EntityIds.FORM_SUBMIT, resource),
                color="primary",
                n_clicks=0,
            ),
            dbc.Button(
                CANCEL_BUTTON_LABEL,
                id=component_id(EntityIds.FORM_CANCEL, resource),
                color="secondary",
                n_clicks=0,
            ),
        ]),
    ],
    id=component_id(EntityIds.FORM_MODAL, resource),
    size="lg",
    backdrop="static",
    is_open=False)


def _field_widget(resource: str, form_field: FormField, value: Any):
    cid = component_id(EntityIds.FORM_FIELD, resource, field=form_field.key)

    if form_field.type == "checkbox":
        return dbc.Switch(id=cid, label=form_field.label, value=bool(value))
    if form_field.type == "textarea":
        return dbc.Textarea(id=cid, value=value or "", placeholder=form_field.placeholder,
                            required=form_field.required, rows=3)
    if form_field.type == "select":
        return dbc.Select(id=cid, options=form_field.resolve_options(),
                          value=value if value not in (None, 0) else None,
                          placeholder=form_field.placeholder, required=form_field.required)
    input_kwargs = {"step": form_field.step} if form_field.step else {}
    return dbc.Input(id=cid, type=form_field.type, value=value,
                     placeholder=form_field.placeholder, required=form_field.required,
                     **input_kwargs)


def render_form_fields(resource: str, fields: Sequence[FormField], form_data: Dict[str, Any]) -> List[html.Div]:
    rendered = []
    for form_field in fields:
        value = form_data.get(form_field.key)
        widget = _field_widget(resource, form_field, value)
        if form_field.type == "checkbox":
            rendered.append(html.Div(widget, className="form-group"))
            continue
        label = form_field.label + (" *" if form_field.required else "")
        rendered.append(html.Div([dbc.Label(label), widget], className="form-group"))
    return rendered


def submit_label(is_editing: bool) -> str:
    return UPDATE_BUTTON_LABEL if is_editing else CREATE_BUTTON_LABEL
