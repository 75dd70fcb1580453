import json
import unittest

import httpx

from vetcare.integrations.messaging import MessagingClient, MessagingError


class MessagingClientTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.requests: list[httpx.Request] = []

    def _client(self, status: int = 201, sender: str | None = "+15550001111") -> MessagingClient:
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(status, json={"sid": "SM123"} if status < 400 else {"detail": "bad number"})

        return MessagingClient(base_url="http://gateway.test", sender=sender, transport=httpx.MockTransport(handler))

    def test_send_posts_whatsapp_addresses(self) -> None:
        with self._client() as client:
            sid = client.send_whatsapp("+9647701234567", "hello")
        self.assertEqual(sid, "SM123")
        body = json.loads(self.requests[0].content)
        self.assertEqual(self.requests[0].url.path, "/messages")
        self.assertEqual(
            body,
            {"from": "whatsapp:+15550001111", "to": "whatsapp:+9647701234567", "body": "hello"},
        )

    def test_prefixed_recipient_is_not_doubled(self) -> None:
        with self._client() as client:
            client.send_whatsapp("whatsapp:+9647701234567", "hi")
        self.assertEqual(json.loads(self.requests[0].content)["to"], "whatsapp:+9647701234567")

    def test_gateway_rejection_raises(self) -> None:
        with self._client(status=400) as client, self.assertRaises(MessagingError):
            client.send_whatsapp("+9647701234567", "hi")

    def test_missing_sender_raises_without_calling_gateway(self) -> None:
        with self._client(sender="") as client, self.assertRaises(MessagingError):
            client.send_whatsapp("+9647701234567", "hi")
        self.assertEqual(self.requests, [])
