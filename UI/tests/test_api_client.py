"""
Tests for the HTTP client and envelope helpers. The requests.Session is a
mock; no network is used.
"""

import unittest
from unittest.mock import MagicMock

import requests

from api.client import ApiClient
from api.envelope import ApiResponse, BusinessError, TransportError, unwrap, unwrap_items
from api.resources import (
    Lease,
    LeaseForm,
    Payment,
    PaymentForm,
    Property,
    PropertyForm,
    Tenant,
    TenantForm,
)


def fake_response(status=200, body=None, text=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400
    if body is None and text is None:
        response.content = b""
        response.text = ""
        response.json.side_effect = ValueError("no body")
    elif body is not None:
        response.content = b"{...}"
        response.text = "{...}"
        response.json.return_value = body
    else:
        response.content = text.encode()
        response.text = text
        response.json.side_effect = ValueError("not json")
    return response


class TestApiClient(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.client = ApiClient("http://api.local/api/", timeout=3, session=self.session)

    def test_list_sends_paging_params(self):
        self.session.request.return_value = fake_response(body={
            "success": True, "data": {"items": [{"id": 1}], "total": 1, "page": 0, "size": 100}})

        envelope = self.client.tenants.list(0, 100, "")

        self.session.request.assert_called_once_with(
            "GET", "http://api.local/api/inquilinos",
            timeout=3, params={"page": 0, "size": 100, "q": ""})
        self.assertTrue(envelope.success)
        self.assertEqual(unwrap_items(envelope), [{"id": 1}])

    def test_json_headers_are_set(self):
        self.assertEqual(self.session.headers["Content-Type"], "application/json")

    def test_create_and_update_send_json(self):
        self.session.request.return_value = fake_response(body={"success": True, "data": {"id": 3}})
        self.client.properties.create({"nombre": "Casa"})
        self.client.properties.update(3, {"nombre": "Casa 2"})
        calls = self.session.request.call_args_list
        self.assertEqual(calls[0].args, ("POST", "http://api.local/api/propiedades"))
        self.assertEqual(calls[0].kwargs["json"], {"nombre": "Casa"})
        self.assertEqual(calls[1].args, ("PUT", "http://api.local/api/propiedades/3"))

    def test_profiles_and_test_data_endpoints(self):
        self.session.request.return_value = fake_response(body={"success": True, "data": None})
        self.client.profiles.get(7)
        self.assertTrue(self.client.create_test_data().success)
        calls = self.session.request.call_args_list
        self.assertEqual(calls[0].args, ("GET", "http://api.local/api/perfil/7"))
        self.assertEqual(calls[1].args, ("POST", "http://api.local/api/test-data"))

    def test_empty_delete_body_is_success(self):
        self.session.request.return_value = fake_response(status=204)
        self.assertTrue(self.client.payments.delete(7).success)

    def test_connection_error_is_transport_error(self):
        self.session.request.side_effect = requests.ConnectionError("refused")
        with self.assertLogs("api.client", level="ERROR"):
            with self.assertRaises(TransportError) as cm:
                self.client.leases.get(1)
        self.assertTrue(cm.exception.retryable)
        self.assertEqual(cm.exception.kind, "transport")

    def test_timeout_is_transport_error(self):
        self.session.request.side_effect = requests.Timeout("slow")
        with self.assertLogs("api.client", level="ERROR"):
            with self.assertRaises(TransportError):
                self.client.leases.list()

    def test_html_error_page_is_transport_error(self):
        self.session.request.return_value = fake_response(status=502, text="<html>Bad gateway</html>")
        with self.assertRaises(TransportError) as cm:
            self.client.properties.list()
        self.assertEqual(cm.exception.status_code, 502)

    def test_error_status_with_envelope_is_returned(self):
        self.session.request.return_value = fake_response(
            status=400, body={"success": False, "message": "Email already registered"})
        with self.assertLogs("api.client", level="WARNING"):
            envelope = self.client.tenants.create({"email": "a@b.c"})
        self.assertFalse(envelope.success)
        with self.assertRaises(BusinessError) as cm:
            unwrap(envelope)
        self.assertEqual(cm.exception.message, "Email already registered")
        self.assertFalse(cm.exception.retryable)

    def test_success_envelope_on_error_status_is_a_failure(self):
        self.session.request.return_value = fake_response(status=500, body={"success": True})
        with self.assertLogs("api.client", level="WARNING"):
            self.assertFalse(self.client.tenants.get(1).success)

    def test_non_object_body_is_transport_error(self):
        self.session.request.return_value = fake_response(body=["not", "an", "envelope"])
        with self.assertLogs("api.client", level="ERROR"):
            with self.assertRaises(TransportError):
                self.client.tenants.list()


class TestEnvelope(unittest.TestCase):

    def test_coerce_accepts_dict_and_model(self):
        envelope = ApiResponse.coerce({"success": True, "data": 1})
        self.assertIs(ApiResponse.coerce(envelope), envelope)

    def test_unwrap_items_accepts_plain_list(self):
        self.assertEqual(unwrap_items({"success": True, "data": [1, 2]}), [1, 2])

    def test_unwrap_items_without_data(self):
        self.assertEqual(unwrap_items({"success": True}), [])

    def test_paged_counts_default_to_items(self):
        items = unwrap_items({"success": True, "data": {"items": [{"id": 1}, {"id": 2}]}})
        self.assertEqual(len(items), 2)

    def test_failure_text_falls_back(self):
        self.assertEqual(ApiResponse(success=False, error="E1").failure_text(), "E1")


class TestResourceRecords(unittest.TestCase):

    def test_unknown_wire_fields_are_ignored(self):
        lease = Lease.model_validate({"id": 5, "nombre": "Contrato", "activo": False, "extra": 1})
        self.assertEqual(lease.id, 5)
        self.assertFalse(lease.activo)
        self.assertFalse(hasattr(lease, "extra"))

    def test_optional_document(self):
        self.assertIsNone(Tenant.model_validate({"id": 1}).documento)

    def test_forms_are_records_without_server_fields(self):
        server_fields = {"id", "createdAt", "updatedAt", "contrato"}
        pairs = [(Property, PropertyForm), (Tenant, TenantForm), (Lease, LeaseForm), (Payment, PaymentForm)]
        for record, form in pairs:
            with self.subTest(record=record.__name__):
                self.assertEqual(set(record.model_fields) - server_fields, set(form.model_fields))


if __name__ == '__main__':
    unittest.main()
