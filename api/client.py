"""
HTTP client for the Prometheus CRUD API.

The console never talks to the network except through this module. Each
business resource is exposed as a ResourceEndpoint with the same five
operations, all returning an ApiResponse envelope.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from api.envelope import ApiResponse, TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class ResourceEndpoint:
    """List/get/create/update/delete for one REST collection."""

    def __init__(self, client: "ApiClient", path: str):
        self.client = client
        self.path = path.strip("/")

    def list(self, page: int = 0, size: int = 10, query: str = "") -> ApiResponse:
        params = {"page": page, "size": size, "q": query}
        return self.client.request("GET", f"/{self.path}", params=params)

    def get(self, entity_id: int) -> ApiResponse:
        return self.client.request("GET", f"/{self.path}/{entity_id}")

    def create(self, payload: Mapping[str, Any]) -> ApiResponse:
        return self.client.request("POST", f"/{self.path}", json=dict(payload))

    def update(self, entity_id: int, payload: Mapping[str, Any]) -> ApiResponse:
        return self.client.request("PUT", f"/{self.path}/{entity_id}", json=dict(payload))

    def delete(self, entity_id: int) -> ApiResponse:
        return self.client.request("DELETE", f"/{self.path}/{entity_id}")

    def __repr__(self):
        return f"ResourceEndpoint({self.path!r})"


class ApiClient:
    """
    Thin wrapper around a requests.Session.

    Args:
        base_url: API root, e.g. ``http://localhost:8080/prometheus/api``
        timeout: per-request timeout in seconds
        session: optional pre-built session (tests inject a mock here)
    """

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

        self.properties = self.resource("propiedades")
        self.tenants = self.resource("inquilinos")
        self.leases = self.resource("alquileres")
        self.payments = self.resource("pagos")
        # Available to callers; no console screen uses it
        self.profiles = self.resource("perfil")

    def resource(self, path: str) -> ResourceEndpoint:
        return ResourceEndpoint(self, path)

    def create_test_data(self) -> ApiResponse:
        """Ask the server to seed demo records. Not wired to any screen."""
        return self.request("POST", "/test-data")

    def request(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        """
        Send one request and decode the envelope.

        An HTTP error status that still carries a JSON envelope is returned
        as that envelope, so the caller sees the server's own failure message.

        Raises:
            TransportError: when no envelope could be obtained
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            logger.error("%s %s timed out after %ss", method, url, self.timeout)
            raise TransportError("Request timed out", detail=str(e)) from e
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise TransportError("Could not reach the server", detail=str(e)) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        body = self._decode(response)

        if body is None and not response.ok:
            raise TransportError(
                f"Server answered {response.status_code}",
                detail=response.text[:200] if response.text else None,
                status_code=response.status_code,
            )

        try:
            envelope = ApiResponse.coerce(body)
        except (TypeError, ValueError) as e:
            logger.error("%s %s returned an unexpected body: %s", method, url, e)
            raise TransportError("Malformed response from server", detail=str(e),
                                 status_code=response.status_code) from e

        if not response.ok and envelope.success:
            # Envelope claims success on an error status; trust the status.
            envelope = envelope.model_copy(update={"success": False})
        if not envelope.success:
            logger.warning("%s %s rejected: %s", method, url, envelope.failure_text())
        return envelope

    @staticmethod
    def _decode(response: requests.Response) -> Optional[Dict[str, Any]]:
        if not response.content:
            return None if not response.ok else {"success": True}
        try:
            return response.json()
        except ValueError:
            return None
