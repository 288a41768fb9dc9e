"""
Response envelopes and error types for the Prometheus CRUD API.

Every endpoint answers with the same wrapper::

    {"success": bool, "data": ..., "message": str, "error": str}

List endpoints put a paged result inside ``data``::

    {"items": [...], "total": int, "page": int, "size": int}

Failures are split in two at this boundary:

- TransportError: no usable envelope came back (connection refused, timeout,
  HTML error page, malformed JSON). Retrying may help.
- BusinessError: the server answered with ``success: false``. Retrying the same
  request will not help.
"""

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, model_validator


class ApiError(Exception):
    """Base class for every failure raised by the API client."""

    kind = "unknown"
    retryable = False

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class TransportError(ApiError):
    kind = "transport"
    retryable = True

    def __init__(self, message: str, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message, detail)
        self.status_code = status_code


class BusinessError(ApiError):
    kind = "business"


class ApiResponse(BaseModel):
    """The uniform ``{success, data, message, error}`` wrapper."""

    success: bool = False
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def coerce(cls, obj: Union["ApiResponse", Mapping[str, Any], None]) -> "ApiResponse":
        """
        Accept an ApiResponse, a raw envelope mapping or None.

        None is what a delete endpoint with an empty body decodes to; it is
        treated as a successful, data-less response.
        """
        if isinstance(obj, cls):
            return obj
        if obj is None:
            return cls(success=True)
        if isinstance(obj, Mapping):
            return cls.model_validate(dict(obj))
        raise TypeError(f"Cannot interpret {type(obj).__name__} as an API envelope")

    def failure_text(self) -> str:
        return self.message or self.error or "Request was rejected by the server"


class PagedResult(BaseModel):
    items: List[Any] = Field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 0

    @model_validator(mode="before")
    @classmethod
    def _fill_counts(cls, values: Any) -> Any:
        # Some endpoints only send the items list.
        if isinstance(values, Mapping):
            values = dict(values)
            items = values.get("items") or []
            values.setdefault("total", len(items))
            values.setdefault("size", len(items))
        return values


def unwrap(response: Union[ApiResponse, Mapping[str, Any], None]) -> Any:
    """
    Return the payload of a successful envelope.

    Raises:
        BusinessError: if the envelope reports ``success: false``
    """
    envelope = ApiResponse.coerce(response)
    if not envelope.success:
        raise BusinessError(envelope.failure_text(), detail=envelope.error)
    return envelope.data


def unwrap_items(response: Union[ApiResponse, Mapping[str, Any], None]) -> List[Any]:
    """Return the ``items`` list of a successful paged envelope."""
    data = unwrap(response)
    if data is None:
        return []
    if isinstance(data, list):
        return list(data)
    return PagedResult.model_validate(data).items
