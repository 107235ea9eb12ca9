"""Tests for submitting a technician update and reporting the outcome."""

import json

import httpx
import pytest

from fieldservice.client.api import ClientContext, ServiceRequestClient
from fieldservice.client.form import ServiceRequestForm
from fieldservice.client.submission import (
    FAILURE_MESSAGE,
    FORBIDDEN_MESSAGE,
    HOME_ROUTE,
    SUCCESS_MESSAGE,
    TRANSPORT_FAILURE_MESSAGE,
    SubmissionOutcome,
    UpdateSubmitter,
)

REQUEST_ID = "4a3c2f7e-3f3a-4d1b-9a51-2b7f1b0d4a11"


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def toast(self, kind, text):
        self.events.append(("toast", kind, text))

    def alert(self, title, message):
        self.events.append(("alert", title, message))

    def navigate(self, route):
        self.events.append(("navigate", route))


def _client(handler, seen=None):
    def recording_handler(request):
        if seen is not None:
            seen.append(request)
        return handler(request)

    return ServiceRequestClient(
        ClientContext(token="token-123", base_url="http://api.test"),
        transport=httpx.MockTransport(recording_handler),
    )


def _form():
    form = ServiceRequestForm({"_id": REQUEST_ID, "status": "Pending", "videoFeedback": ""})
    form.select_status("Completed")
    form.set_comments("Fixed")
    return form


@pytest.mark.asyncio
async def test_success_toasts_and_navigates_home():
    seen = []
    record = {"_id": REQUEST_ID, "status": "Completed", "comments": "Fixed"}
    notifier = RecordingNotifier()

    async with _client(lambda request: httpx.Response(200, json=record), seen) as client:
        result = await UpdateSubmitter(client, notifier).submit(_form())

    assert result.outcome is SubmissionOutcome.UPDATED
    assert result.record == record
    assert notifier.events == [("toast", "success", SUCCESS_MESSAGE), ("navigate", HOME_ROUTE)]

    (request,) = seen
    assert request.method == "PUT"
    assert request.url.path == f"/api/service-requests/{REQUEST_ID}"
    assert request.headers["Authorization"] == "Bearer token-123"
    assert json.loads(request.content) == {
        "comments": "Fixed",
        "status": "Completed",
        "videoFeedback": "",
        "signature": "",
    }


@pytest.mark.asyncio
async def test_forbidden_shows_permission_toast_and_stays():
    notifier = RecordingNotifier()
    form = _form()
    response = httpx.Response(403, json={"message": "Access denied."})

    async with _client(lambda request: response) as client:
        result = await UpdateSubmitter(client, notifier).submit(form)

    assert result.outcome is SubmissionOutcome.FORBIDDEN
    assert result.status_code == 403
    assert notifier.events == [("toast", "error", FORBIDDEN_MESSAGE)]
    assert form.status == "Completed"
    assert form.comments == "Fixed"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, body, expected",
    [
        (404, {"message": "Service request not found"}, "Service request not found"),
        (500, {"message": "Internal server error", "errorId": "abc"}, "Internal server error"),
        (422, {"detail": []}, FAILURE_MESSAGE),
    ],
)
async def test_other_failures_alert_with_server_message(status_code, body, expected):
    notifier = RecordingNotifier()

    async with _client(lambda request: httpx.Response(status_code, json=body)) as client:
        result = await UpdateSubmitter(client, notifier).submit(_form())

    assert result.outcome is SubmissionOutcome.REJECTED
    assert result.status_code == status_code
    assert notifier.events == [("alert", "Error", expected)]


@pytest.mark.asyncio
async def test_non_json_failure_uses_fallback_message():
    notifier = RecordingNotifier()

    async with _client(lambda request: httpx.Response(502, text="Bad gateway")) as client:
        result = await UpdateSubmitter(client, notifier).submit(_form())

    assert result.message == FAILURE_MESSAGE
    assert notifier.events == [("alert", "Error", FAILURE_MESSAGE)]


@pytest.mark.asyncio
async def test_transport_error_alerts_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    notifier = RecordingNotifier()
    async with _client(handler) as client:
        result = await UpdateSubmitter(client, notifier).submit(_form())

    assert result.outcome is SubmissionOutcome.TRANSPORT_ERROR
    assert len(calls) == 1
    assert notifier.events == [("alert", "Error", TRANSPORT_FAILURE_MESSAGE)]


@pytest.mark.asyncio
async def test_missing_id_sends_nothing():
    seen = []
    notifier = RecordingNotifier()

    async with _client(lambda request: httpx.Response(200, json={}), seen) as client:
        result = await UpdateSubmitter(client, notifier).submit(ServiceRequestForm({"_id": ""}))

    assert result.outcome is SubmissionOutcome.MISSING_ID
    assert seen == []
    assert notifier.events == [("alert", "Error", "Service request ID is missing")]


@pytest.mark.asyncio
async def test_submit_against_running_app(api_client, register_user, new_request_body):
    from fieldservice.main import app

    alice = await register_user("Alice", "alice@example.com")
    bob = await register_user("Bob", "bob@example.com")
    created = (
        await api_client.post(
            "/api/service-requests", json=new_request_body, headers=alice["headers"]
        )
    ).json()

    def client_for(user):
        return ServiceRequestClient(
            ClientContext(token=user["token"], base_url="http://testserver"),
            transport=httpx.ASGITransport(app=app),
        )

    form = ServiceRequestForm(created)
    form.select_status("Completed")
    form.pad.draw([(10, 10), (80, 40)])
    form.save_signature()

    bob_notifier = RecordingNotifier()
    async with client_for(bob) as client:
        denied = await UpdateSubmitter(client, bob_notifier).submit(form)
    assert denied.outcome is SubmissionOutcome.FORBIDDEN
    assert bob_notifier.events == [("toast", "error", FORBIDDEN_MESSAGE)]

    alice_notifier = RecordingNotifier()
    async with client_for(alice) as client:
        accepted = await UpdateSubmitter(client, alice_notifier).submit(form)
        records = await client.list_service_requests()

    assert accepted.outcome is SubmissionOutcome.UPDATED
    assert accepted.record["status"] == "Completed"
    assert accepted.record["signature"] == form.signature
    assert records[0]["signature"] == form.signature
    assert alice_notifier.events[-1] == ("navigate", HOME_ROUTE)
