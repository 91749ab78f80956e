"""Tests for infrastructure/notifications/fcm_sender.py"""

import json
from uuid import uuid4

import httpx

from core.domain.models import AnnouncementPriority, DevicePlatform, PushToken, PushMessage
from infrastructure.notifications.fcm_sender import FCMSender, build_fcm_payload

ENDPOINT = "https://fcm.example/send"


def token(value="device-token-1234567890"):
    return PushToken(id=uuid4(), user_id="u1", push_token=value, platform=DevicePlatform.ANDROID)


def message(priority=AnnouncementPriority.NORMAL):
    return PushMessage(title="📢 Rain delay", body="Games start at 7", priority=priority,
                       data={"type": "announcement"})


def sender_with(handler, server_key="server-key"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FCMSender(server_key, ENDPOINT, client=client)


class TestPayload:

    def test_normal_priority(self):
        payload = build_fcm_payload(message(), "tok")
        assert payload["to"] == "tok"
        assert payload["notification"] == {"title": "📢 Rain delay", "body": "Games start at 7"}
        assert payload["data"] == {"type": "announcement"}
        assert payload["android"]["priority"] == "normal"
        assert payload["android"]["notification"]["sound"] == "default"
        assert payload["apns"]["payload"]["aps"]["sound"] == "default"

    def test_high_priority_keeps_default_sound(self):
        payload = build_fcm_payload(message(AnnouncementPriority.HIGH), "tok")
        assert payload["android"]["priority"] == "high"
        assert payload["android"]["notification"]["sound"] == "default"

    def test_urgent_sound(self):
        payload = build_fcm_payload(message(AnnouncementPriority.URGENT), "tok")
        assert payload["android"]["priority"] == "high"
        assert payload["android"]["notification"]["sound"] == "urgent_sound"
        assert payload["apns"]["payload"]["aps"]["sound"] == "urgent_sound.wav"


class TestSend:

    async def test_posts_with_server_key(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": 1})

        assert await sender_with(handler).send(token(), message()) is True
        request = seen[0]
        assert str(request.url) == ENDPOINT
        assert request.headers["Authorization"] == "key=server-key"
        assert json.loads(request.content)["to"] == "device-token-1234567890"

    async def test_error_status_is_failure(self):
        def handler(request):
            return httpx.Response(401, text="InvalidRegistration")

        assert await sender_with(handler).send(token(), message()) is False

    async def test_transport_error_is_failure(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        assert await sender_with(handler).send(token(), message()) is False

    async def test_missing_key_skips_send(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        assert await sender_with(handler, server_key="").send(token(), message()) is False
        assert calls == []

    def test_platforms(self):
        sender = FCMSender("k", ENDPOINT)
        assert DevicePlatform.TELEGRAM not in sender.platforms
        assert DevicePlatform.IOS in sender.platforms
