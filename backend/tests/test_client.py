import json
import unittest

import httpx
from pydantic import ValidationError

from vetcare.client import ApiRequestError, VetcareClient, dirty_fields, error_message
from vetcare.client.errors import GENERIC_ERROR_MESSAGE
from vetcare.schemas.visit import REMINDER_DATE_REQUIRED

PAGE = {"data": [{"id": "o1"}], "meta": {"totalCount": 1, "currentPage": 1, "totalPages": 1, "itemsPerPage": 20}}


class RecordingTransport(httpx.MockTransport):
    def __init__(self, responder) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)


def ok(request: httpx.Request) -> httpx.Response:
    if request.method == "GET":
        return httpx.Response(200, json=PAGE)
    return httpx.Response(200, json={"id": "x"})


class ClientTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.transport = RecordingTransport(ok)
        self.client = VetcareClient("http://api.test", token="tok", transport=self.transport)

    def tearDown(self) -> None:
        self.client.close()

    def test_list_sends_serialized_filters_with_bearer(self) -> None:
        page = self.client.list_owners(search="", page=2, status="ALL")
        request = self.transport.requests[0]
        self.assertEqual(request.url.path, "/api/v1/owners")
        self.assertEqual(dict(request.url.params), {"page": "2"})
        self.assertEqual(request.headers["Authorization"], "Bearer tok")
        self.assertEqual(page.items, [{"id": "o1"}])

    def test_empty_list_body_reads_as_empty_page(self) -> None:
        client = VetcareClient("http://api.test", transport=httpx.MockTransport(lambda request: httpx.Response(204)))
        page = client.list_owners()
        client.close()
        self.assertTrue(page.is_empty)
        self.assertEqual(page.total_pages, 1)

    def test_identical_filters_hit_the_cache(self) -> None:
        self.client.list_owners(search="ali")
        self.client.list_owners(search="ali")
        self.assertEqual(len(self.transport.requests), 1)
        self.client.refetch("owners", {"search": "ali"})
        self.assertEqual(len(self.transport.requests), 2)

    def test_mutation_invalidates_related_lists(self) -> None:
        self.client.list_owners()
        self.client.list_owner_pets("o1")
        self.client.list_visits()
        self.client.create_owner({"firstName": "Sara", "lastName": "Ali", "phone": "0770"})
        self.assertFalse(self.client.is_cached("owners"))
        self.assertFalse(self.client.is_cached("owners/o1/pets"))
        self.assertTrue(self.client.is_cached("visits"))

    def test_update_sends_only_dirty_fields(self) -> None:
        original = {"firstName": "Sara", "lastName": "Ali", "phone": "0770"}
        self.client.update_owner("o1", {**original, "phone": "0771"}, original=original)
        request = self.transport.requests[-1]
        self.assertEqual(request.method, "PATCH")
        self.assertEqual(json.loads(request.content), {"phone": "0771"})

    def test_invalid_payload_is_rejected_before_sending(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.client.create_visit(
                "p1",
                {"visitDate": "2026-01-05T10:00:00Z", "visitType": "checkup", "isReminderEnabled": True},
            )
        self.assertEqual(self.transport.requests, [])
        self.assertIn(REMINDER_DATE_REQUIRED, error_message(ctx.exception))

    def test_visit_update_checks_the_merged_record(self) -> None:
        original = {
            "id": "v1",
            "visitDate": "2026-01-05T10:00:00",
            "visitType": "checkup",
            "isReminderEnabled": False,
            "nextReminderDate": None,
        }
        with self.assertRaises(ValidationError):
            self.client.update_visit("p1", "v1", {**original, "isReminderEnabled": True}, original=original)
        self.assertEqual(self.transport.requests, [])

        self.client.update_visit(
            "p1",
            "v1",
            {**original, "isReminderEnabled": True, "nextReminderDate": "2026-02-05T00:00:00"},
            original=original,
        )
        sent = json.loads(self.transport.requests[-1].content)
        self.assertEqual(sent, {"isReminderEnabled": True, "nextReminderDate": "2026-02-05T00:00:00"})

    def test_dirty_fields(self) -> None:
        self.assertEqual(dirty_fields({"a": 1, "b": 2}, {"a": 1, "b": 3, "c": None}), {"b": 3, "c": None})


class ClientErrorTestCase(unittest.TestCase):
    def _client(self, responder) -> VetcareClient:
        return VetcareClient("http://api.test", transport=httpx.MockTransport(responder))

    def test_server_detail_becomes_message(self) -> None:
        client = self._client(lambda r: httpx.Response(409, json={"detail": "Phone number already registered"}))
        with self.assertRaises(ApiRequestError) as ctx:
            client.get_owner("o1")
        self.assertEqual(ctx.exception.status, 409)
        self.assertEqual(error_message(ctx.exception), "Phone number already registered")

    def test_validation_detail_uses_first_message(self) -> None:
        body = {"detail": [{"loc": ["body", "name"], "msg": "Field required", "type": "missing"}]}
        client = self._client(lambda r: httpx.Response(422, json=body))
        with self.assertRaises(ApiRequestError) as ctx:
            client.get_pet("p1")
        self.assertEqual(ctx.exception.message, "Field required")

    def test_unreadable_error_falls_back_to_generic_message(self) -> None:
        client = self._client(lambda r: httpx.Response(500, text="<html>oops</html>"))
        with self.assertRaises(ApiRequestError) as ctx:
            client.me()
        self.assertEqual(error_message(ctx.exception), GENERIC_ERROR_MESSAGE)

    def test_network_failure_has_no_status(self) -> None:
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = self._client(refuse)
        with self.assertRaises(ApiRequestError) as ctx:
            client.dashboard_stats()
        self.assertIsNone(ctx.exception.status)
        self.assertEqual(error_message(ctx.exception), GENERIC_ERROR_MESSAGE)

    def test_login_stores_token(self) -> None:
        def respond(request):
            return httpx.Response(200, json={"accessToken": "abc", "tokenType": "bearer", "user": {"id": "u1"}})

        client = self._client(respond)
        self.assertEqual(client.login("a@b.co", "password123"), {"id": "u1"})
        self.assertEqual(client.token, "abc")
