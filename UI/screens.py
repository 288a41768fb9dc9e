"""
Resource screens.

Each business resource is described once here: its columns, form fields,
detail fields, search predicate and messages. The generic entity controller
and table view do the rest. A screen is turned into a working controller by
``build_config`` with an ApiClient.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

import dash_bootstrap_components as dbc
from dash import html
from pydantic import BaseModel

from api.client import ApiClient
from api.envelope import unwrap_items
from api.resources import (
    LeaseForm,
    PaymentForm,
    PropertyForm,
    TenantForm,
    initial_form_data,
    to_form_data,
)
from UI.components.entity_detail_modal import DetailField
from UI.components.entity_form_modal import FormField
from UI.components.entity_table import CustomAction
from UI.constants import CONFIRM_DELETE_TEMPLATE
from UI.state.entity_controller import EntityConfig
from UI.state.table_state import ColumnSpec
from UI.utils.text_utils import contains_term, format_currency, format_date


Entity = Dict[str, Any]


class Lookups:
    """
    Id -> record maps for screens that display related records by name
    (leases show property and tenant names, payments show lease names).
    """

    def __init__(self):
        self.properties: Dict[int, Entity] = {}
        self.tenants: Dict[int, Entity] = {}
        self.leases: Dict[int, Entity] = {}

    @staticmethod
    def _index(items) -> Dict[int, Entity]:
        return {item["id"]: item for item in items if "id" in item}

    def load_properties(self, client: ApiClient, size: int) -> None:
        self.properties = self._index(unwrap_items(client.properties.list(0, size, "")))

    def load_tenants(self, client: ApiClient, size: int) -> None:
        self.tenants = self._index(unwrap_items(client.tenants.list(0, size, "")))

    def set_leases(self, items) -> None:
        self.leases = self._index(items)

    def property_name(self, property_id: Any) -> str:
        record = self.properties.get(property_id)
        return record.get("nombre", "") if record else "Property not found"

    def tenant_name(self, tenant_id: Any) -> str:
        record = self.tenants.get(tenant_id)
        return record.get("nombre", "") if record else "Tenant not found"

    def lease_label(self, lease_id: Any) -> str:
        record = self.leases.get(lease_id)
        if not record:
            return "Lease not found"
        return record.get("nombre") or f"Lease #{record['id']}"

    def options(self, records: Dict[int, Entity], label: Callable[[Entity], str]) -> List[Dict[str, Any]]:
        return [{"label": label(r), "value": rid} for rid, r in records.items()]


lookups = Lookups()


@dataclass
class ResourceScreen:
    key: str
    title: str
    new_button_label: str
    create_title: str
    edit_title: str
    detail_title: str
    loading_message: str
    empty_message: str
    empty_search_message: str
    select_all_label: str
    load_error: str
    save_error: str
    delete_error: str
    endpoint: str
    form_model: Type[BaseModel]
    columns: Sequence[ColumnSpec]
    form_fields: Sequence[FormField]
    detail_fields: Sequence[DetailField]
    matches: Callable[[Entity, str], bool]
    entity_name: Callable[[Entity], str]
    path: str = ""
    custom_actions: Sequence[CustomAction] = ()
    # Hook to load related records before the collection itself
    before_load: Optional[Callable[[ApiClient, int], None]] = None
    after_load: Optional[Callable[[List[Entity]], None]] = None

    def entity_id(self, entity: Entity) -> int:
        return int(entity["id"])

    def map_to_form(self, entity: Entity) -> Dict[str, Any]:
        return to_form_data(self.form_model, entity)


def build_config(screen: ResourceScreen, client: ApiClient, page_size: int) -> EntityConfig:
    """Wire a screen to the API: one large page, filtered locally."""
    endpoint = getattr(client, screen.endpoint)

    def load():
        if screen.before_load is not None:
            screen.before_load(client, page_size)
        response = endpoint.list(0, page_size, "")
        if screen.after_load is not None and response.success:
            screen.after_load(unwrap_items(response))
        return response

    return EntityConfig(
        load=load,
        create=endpoint.create,
        update=endpoint.update,
        delete=endpoint.delete,
        entity_id=screen.entity_id,
        entity_name=screen.entity_name,
        matches=screen.matches,
        initial_form_data=initial_form_data(screen.form_model),
        load_error=screen.load_error,
        save_error=screen.save_error,
        delete_error=screen.delete_error,
        confirm_template=CONFIRM_DELETE_TEMPLATE,
    )


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def _status_badge(active: bool, on: str, off: str) -> dbc.Badge:
    return dbc.Badge(on if active else off, color="success" if active else "secondary", className="status-badge")


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

PROPERTIES = ResourceScreen(
    key="properties",
    path="/properties",
    title="Properties",
    new_button_label="New Property",
    create_title="New Property",
    edit_title="Edit Property",
    detail_title="Property Details",
    loading_message="Loading properties...",
    empty_message="No properties registered",
    empty_search_message="No properties match the search",
    select_all_label="Select all properties",
    load_error="Could not load the properties",
    save_error="Could not save the property",
    delete_error="Could not delete the property",
    endpoint="properties",
    form_model=PropertyForm,
    columns=[
        ColumnSpec("nombre", "Name", lambda p: p.get("nombre"), sortable=True, max_length=25),
        ColumnSpec("direccion", "Address", lambda p: p.get("direccion"), max_length=35),
        ColumnSpec("descripcion", "Description", lambda p: p.get("descripcion"), max_length=40),
        ColumnSpec("rentado", "Status", lambda p: _status_badge(p.get("rentado"), "Rented", "Available")),
    ],
    form_fields=[
        FormField("nombre", "Name", required=True),
        FormField("direccion", "Address", required=True),
        FormField("descripcion", "Description", type="textarea", required=True),
        FormField("rentado", "Rented", type="checkbox"),
    ],
    detail_fields=[
        DetailField("nombre", "Name"),
        DetailField("direccion", "Address"),
        DetailField("descripcion", "Description"),
        DetailField("rentado", "Status", lambda v: "Rented" if v else "Available"),
        DetailField("createdAt", "Created", format_date),
        DetailField("updatedAt", "Updated", format_date),
    ],
    matches=lambda p, term: contains_term(term, p.get("nombre"), p.get("direccion"), p.get("descripcion")),
    entity_name=lambda p: p.get("nombre") or f"Property #{p.get('id')}",
)


# ---------------------------------------------------------------------------
# Tenants
# ---------------------------------------------------------------------------

TENANTS = ResourceScreen(
    key="tenants",
    path="/tenants",
    title="Tenants",
    new_button_label="New Tenant",
    create_title="New Tenant",
    edit_title="Edit Tenant",
    detail_title="Tenant Details",
    loading_message="Loading tenants...",
    empty_message="No tenants registered",
    empty_search_message="No tenants match the search",
    select_all_label="Select all tenants",
    load_error="Could not load the tenants",
    save_error="Could not save the tenant",
    delete_error="Could not delete the tenant",
    endpoint="tenants",
    form_model=TenantForm,
    columns=[
        ColumnSpec("nombre", "Name", lambda t: t.get("nombre"), sortable=True, max_length=25),
        ColumnSpec("email", "Email", lambda t: t.get("email"), sortable=True, max_length=25),
        ColumnSpec("telefono", "Phone", lambda t: t.get("telefono"), max_length=35),
        ColumnSpec("documento", "Document", lambda t: t.get("documento"), max_length=35),
    ],
    form_fields=[
        FormField("nombre", "Name", required=True),
        FormField("email", "Email", type="email", required=True),
        FormField("telefono", "Phone", required=True),
        FormField("documento", "Document"),
    ],
    detail_fields=[
        DetailField("nombre", "Name"),
        DetailField("email", "Email"),
        DetailField("telefono", "Phone"),
        DetailField("documento", "Document"),
    ],
    matches=lambda t, term: contains_term(term, t.get("nombre"), t.get("email"),
                                          t.get("telefono"), t.get("documento")),
    entity_name=lambda t: t.get("nombre") or f"Tenant #{t.get('id')}",
)


# ---------------------------------------------------------------------------
# Leases
# ---------------------------------------------------------------------------

def _load_lease_lookups(client: ApiClient, size: int) -> None:
    lookups.load_properties(client, size)
    lookups.load_tenants(client, size)


def _flip_active(lease: Entity) -> Dict[str, Any]:
    form = to_form_data(LeaseForm, lease)
    form["activo"] = not form["activo"]
    return form


def _toggle_lease_active(lease: Entity, controller) -> None:
    """Flip a lease's ``activo`` flag without opening the dialog."""
    controller.update_entity(lease, _flip_active)


LEASES = ResourceScreen(
    key="leases",
    path="/leases",
    title="Leases",
    new_button_label="New Lease",
    create_title="New Lease",
    edit_title="Edit Lease",
    detail_title="Lease Details",
    loading_message="Loading leases...",
    empty_message="No leases registered",
    empty_search_message="No leases match the search",
    select_all_label="Select all leases",
    load_error="Could not load the leases",
    save_error="Could not save the lease",
    delete_error="Could not delete the lease",
    endpoint="leases",
    form_model=LeaseForm,
    columns=[
        ColumnSpec("nombre", "Name", lambda a: a.get("nombre"), sortable=True, max_length=25),
        ColumnSpec("propiedad", "Property", lambda a: lookups.property_name(a.get("propiedadId")), max_length=25),
        ColumnSpec("inquilino", "Tenant", lambda a: lookups.tenant_name(a.get("inquilinoId")), max_length=25),
        ColumnSpec("fechaInicio", "Start", lambda a: format_date(a.get("fechaInicio")), sortable=True),
        ColumnSpec("fechaFin", "End", lambda a: format_date(a.get("fechaFin"))),
        ColumnSpec("montoMensual", "Monthly rent", lambda a: format_currency(a.get("montoMensual"))),
        ColumnSpec("activo", "Status", lambda a: _status_badge(a.get("activo"), "Active", "Inactive")),
    ],
    form_fields=[
        FormField("nombre", "Name", required=True),
        FormField("propiedadId", "Property", type="select", required=True, placeholder="Select property",
                  options=lambda: lookups.options(lookups.properties, lambda r: r.get("nombre", ""))),
        FormField("inquilinoId", "Tenant", type="select", required=True, placeholder="Select tenant",
                  options=lambda: lookups.options(lookups.tenants, lambda r: r.get("nombre", ""))),
        FormField("fechaInicio", "Start date", type="date", required=True),
        FormField("fechaFin", "End date", type="date", required=True),
        FormField("meses", "Months", type="number", step="1"),
        FormField("montoMensual", "Monthly rent", type="number", step="0.01", required=True),
        FormField("personas", "Occupants", type="number", step="1"),
        FormField("activo", "Active", type="checkbox"),
    ],
    detail_fields=[
        DetailField("nombre", "Name"),
        DetailField("propiedadId", "Property", lookups.property_name),
        DetailField("inquilinoId", "Tenant", lookups.tenant_name),
        DetailField("fechaInicio", "Start date", format_date),
        DetailField("fechaFin", "End date", format_date),
        DetailField("meses", "Months"),
        DetailField("montoMensual", "Monthly rent", format_currency),
        DetailField("personas", "Occupants"),
        DetailField("activo", "Active", _yes_no),
    ],
    matches=lambda a, term: contains_term(
        term,
        a.get("nombre"),
        lookups.property_name(a.get("propiedadId")),
        lookups.tenant_name(a.get("inquilinoId")),
    ),
    entity_name=lambda a: a.get("nombre") or f"Lease #{a.get('id')}",
    custom_actions=[
        CustomAction("toggle-active", "Toggle active", _toggle_lease_active, icon="fas fa-power-off"),
    ],
    before_load=_load_lease_lookups,
    after_load=lookups.set_leases,
)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

def _load_payment_lookups(client: ApiClient, size: int) -> None:
    lookups.set_leases(unwrap_items(client.leases.list(0, size, "")))


def _utilities(payment: Entity) -> html.Div:
    flags = [
        ("pagoRenta", "fas fa-home", "Rent"),
        ("pagoAgua", "fas fa-tint", "Water"),
        ("pagoEnergia", "fas fa-bolt", "Power"),
        ("pagoGas", "fas fa-fire", "Gas"),
    ]
    return html.Div(
        [html.I(className=f"{icon} {'paid' if payment.get(key) else 'unpaid'}", title=label)
         for key, icon, label in flags],
        className="utility-flags",
    )


PAYMENTS = ResourceScreen(
    key="payments",
    path="/payments",
    title="Payments",
    new_button_label="New Payment",
    create_title="New Payment",
    edit_title="Edit Payment",
    detail_title="Payment Details",
    loading_message="Loading payments...",
    empty_message="No payments registered",
    empty_search_message="No payments match the search",
    select_all_label="Select all payments",
    load_error="Could not load the payments",
    save_error="Could not save the payment",
    delete_error="Could not delete the payment",
    endpoint="payments",
    form_model=PaymentForm,
    columns=[
        ColumnSpec("alquiler", "Lease", lambda p: lookups.lease_label(p.get("alquilerId")), max_length=25),
        ColumnSpec("fechaPago", "Date", lambda p: format_date(p.get("fechaPago")), sortable=True),
        ColumnSpec("montoMensual", "Amount", lambda p: format_currency(p.get("montoMensual")), sortable=True),
        ColumnSpec("servicios", "Paid items", _utilities),
    ],
    form_fields=[
        FormField("alquilerId", "Lease", type="select", required=True, placeholder="Select lease",
                  options=lambda: lookups.options(lookups.leases,
                                                  lambda r: r.get("nombre") or f"Lease #{r['id']}")),
        FormField("fechaPago", "Payment date", type="date", required=True),
        FormField("montoMensual", "Amount", type="number", step="0.01", required=True),
        FormField("pagoRenta", "Rent", type="checkbox"),
        FormField("pagoAgua", "Water", type="checkbox"),
        FormField("pagoEnergia", "Power", type="checkbox"),
        FormField("pagoGas", "Gas", type="checkbox"),
    ],
    detail_fields=[
        DetailField("alquilerId", "Lease", lookups.lease_label),
        DetailField("fechaPago", "Payment date", format_date),
        DetailField("montoMensual", "Amount", format_currency),
        DetailField("pagoRenta", "Rent", _yes_no),
        DetailField("pagoAgua", "Water", _yes_no),
        DetailField("pagoEnergia", "Power", _yes_no),
        DetailField("pagoGas", "Gas", _yes_no),
    ],
    matches=lambda p, term: contains_term(
        term,
        lookups.lease_label(p.get("alquilerId")),
        p.get("fechaPago"),
        p.get("montoMensual"),
    ),
    entity_name=lambda p: f"payment #{p.get('id')}",
    before_load=_load_payment_lookups,
)


SCREENS: Dict[str, ResourceScreen] = {
    screen.key: screen for screen in (PROPERTIES, TENANTS, LEASES, PAYMENTS)
}
