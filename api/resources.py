"""
Wire shapes of the business resources.

Field names follow the backend (camelCase, Spanish). The console handles
entities as plain dicts; these models document the shape and give each
resource a matching form model, i.e. the entity without ``id`` and the
server-maintained timestamps.
"""

from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Property(_Record):
    """Wire shape of a property record."""

    id: int
    nombre: str = ""
    direccion: str = ""
    descripcion: str = ""
    rentado: bool = False
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class PropertyForm(_Record):
    nombre: str = ""
    direccion: str = ""
    descripcion: str = ""
    rentado: bool = False


class Tenant(_Record):
    """Wire shape of a tenant record."""

    id: int
    nombre: str = ""
    email: str = ""
    telefono: str = ""
    documento: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class TenantForm(_Record):
    nombre: str = ""
    email: str = ""
    telefono: str = ""
    documento: str = ""


class Lease(_Record):
    """Wire shape of a lease record. ``contrato`` is the uploaded contract, not edited here."""

    id: int
    nombre: str = ""
    propiedadId: int = 0
    inquilinoId: int = 0
    fechaInicio: str = ""
    fechaFin: str = ""
    meses: int = 0
    montoMensual: float = 0
    personas: int = 0
    activo: bool = True
    contrato: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class LeaseForm(_Record):
    nombre: str = ""
    propiedadId: int = 0
    inquilinoId: int = 0
    fechaInicio: str = ""
    fechaFin: str = ""
    meses: int = 0
    montoMensual: float = 0
    personas: int = 0
    activo: bool = True


class Payment(_Record):
    """Wire shape of a payment record."""

    id: int
    alquilerId: int = 0
    fechaPago: str = ""
    montoMensual: float = 0
    pagoRenta: bool = False
    pagoAgua: bool = False
    pagoEnergia: bool = False
    pagoGas: bool = False


class PaymentForm(_Record):
    alquilerId: int = 0
    fechaPago: str = ""
    montoMensual: float = 0
    pagoRenta: bool = False
    pagoAgua: bool = False
    pagoEnergia: bool = False
    pagoGas: bool = False


def initial_form_data(form_cls: Type[BaseModel]) -> Dict[str, Any]:
    """Blank form values for a create dialog."""
    return form_cls().model_dump()


def to_form_data(form_cls: Type[BaseModel], entity: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Project a persisted entity onto its form model.

    Fields the form never edits (id, timestamps) are dropped; optional text
    fields the server left null come back as empty strings.
    """
    values = {}
    for name, field in form_cls.model_fields.items():
        value = entity.get(name)
        if value is None:
            value = field.get_default(call_default_factory=True)
        values[name] = value
    return form_cls.model_validate(values).model_dump()
