"""
Submit a technician's form and turn the API response into user feedback.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from fieldservice.client.api import ServiceRequestClient
from fieldservice.client.form import MissingServiceRequestId, ServiceRequestForm

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Service request updated successfully!"
FORBIDDEN_MESSAGE = "You do not have permission to update this service request."
FAILURE_MESSAGE = "Failed to update service request"
TRANSPORT_FAILURE_MESSAGE = "Failed to update service request. Please try again."
HOME_ROUTE = "Home"


class Notifier(Protocol):
    """The UI surface the submitter reports to."""

    def toast(self, kind: str, text: str) -> None: ...

    def alert(self, title: str, message: str) -> None: ...

    def navigate(self, route: str) -> None: ...


class LoggingNotifier:
    """Notifier for headless use: every notification becomes a log line."""

    def toast(self, kind: str, text: str) -> None:
        logger.info("toast", extra={"kind": kind, "text": text})

    def alert(self, title: str, message: str) -> None:
        logger.warning("alert", extra={"title": title, "alert_message": message})

    def navigate(self, route: str) -> None:
        logger.info("navigate", extra={"route": route})


class SubmissionOutcome(str, enum.Enum):
    UPDATED = "updated"
    FORBIDDEN = "forbidden"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"
    MISSING_ID = "missing_id"


@dataclass
class SubmissionResult:
    outcome: SubmissionOutcome
    status_code: Optional[int] = None
    message: Optional[str] = None
    # Server-confirmed record on success; the form itself is left untouched.
    record: Optional[Dict[str, Any]] = None


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class UpdateSubmitter:
    """
    Sends a form's payload and reports exactly one notification per attempt.

    Nothing is retried.
    """

    def __init__(self, client: ServiceRequestClient, notifier: Notifier):
        self.client = client
        self.notifier = notifier

    async def submit(self, form: ServiceRequestForm) -> SubmissionResult:
        logger.info(
            "service_request_submit",
            extra={"has_signature": bool(form.signature)},
        )
        try:
            request_id = form.require_id()
        except MissingServiceRequestId as exc:
            self.notifier.alert("Error", str(exc))
            return SubmissionResult(SubmissionOutcome.MISSING_ID, message=str(exc))

        try:
            response = await self.client.update_service_request(request_id, form.build_payload())
        except httpx.HTTPError as exc:
            logger.error(
                "service_request_update_failed",
                extra={"service_request_id": request_id, "error": str(exc)},
            )
            self.notifier.alert("Error", TRANSPORT_FAILURE_MESSAGE)
            return SubmissionResult(
                SubmissionOutcome.TRANSPORT_ERROR, message=TRANSPORT_FAILURE_MESSAGE
            )

        body = _json_body(response)

        if response.is_success:
            self.notifier.toast("success", SUCCESS_MESSAGE)
            self.notifier.navigate(HOME_ROUTE)
            return SubmissionResult(
                SubmissionOutcome.UPDATED,
                status_code=response.status_code,
                message=SUCCESS_MESSAGE,
                record=body or None,
            )

        if response.status_code == httpx.codes.FORBIDDEN:
            self.notifier.toast("error", FORBIDDEN_MESSAGE)
            return SubmissionResult(
                SubmissionOutcome.FORBIDDEN,
                status_code=response.status_code,
                message=FORBIDDEN_MESSAGE,
            )

        message = body.get("message") or FAILURE_MESSAGE
        self.notifier.alert("Error", message)
        return SubmissionResult(
            SubmissionOutcome.REJECTED,
            status_code=response.status_code,
            message=message,
        )
