"""
Technician client: form capture and update submission against the API.
"""

from fieldservice.client.api import ClientContext, ServiceRequestClient
from fieldservice.client.form import (
    STATUS_OPTIONS,
    MissingServiceRequestId,
    RecorderState,
    ServiceRequestForm,
    VideoRecorder,
)
from fieldservice.client.signature import SignaturePad, SignaturePadError
from fieldservice.client.submission import (
    LoggingNotifier,
    Notifier,
    SubmissionOutcome,
    SubmissionResult,
    UpdateSubmitter,
)

__all__ = [
    "ClientContext",
    "ServiceRequestClient",
    "STATUS_OPTIONS",
    "MissingServiceRequestId",
    "RecorderState",
    "ServiceRequestForm",
    "VideoRecorder",
    "SignaturePad",
    "SignaturePadError",
    "LoggingNotifier",
    "Notifier",
    "SubmissionOutcome",
    "SubmissionResult",
    "UpdateSubmitter",
]
