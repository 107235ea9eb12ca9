"""
Technician-side update form: status, comments, signature and video toggle.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fieldservice.client.signature import SignaturePad

logger = logging.getLogger(__name__)

STATUS_OPTIONS: Tuple[str, ...] = (
    "Pending",
    "In Progress",
    "Completed",
    "Cancelled",
    "On Hold",
)
DEFAULT_STATUS = "Pending"


class MissingServiceRequestId(ValueError):
    """The record being edited has no identifier, so it cannot be submitted."""

    def __init__(self):
        super().__init__("Service request ID is missing")


class RecorderState(str, enum.Enum):
    IDLE = "idle"
    RECORDING = "recording"


class VideoRecorder:
    """
    Two-state record toggle. No media is captured; only the state flips.
    """

    def __init__(self):
        self.state = RecorderState.IDLE

    @property
    def is_recording(self) -> bool:
        return self.state is RecorderState.RECORDING

    def toggle(self) -> str:
        """Flip the state and return the acknowledgement text."""
        if self.is_recording:
            self.state = RecorderState.IDLE
            return "Video recording stopped"
        self.state = RecorderState.RECORDING
        return "Video recording started"


class ServiceRequestForm:
    """
    Editable state for one service request.

    ``record`` is the service request as returned by the API (camelCase keys,
    identifier under ``_id``). The record itself is never modified.
    """

    def __init__(self, record: Optional[Mapping[str, Any]] = None, pad: Optional[SignaturePad] = None):
        self.record: Mapping[str, Any] = record or {}
        self.status: str = self.record.get("status") or DEFAULT_STATUS
        self.comments: str = self.record.get("comments") or ""
        self.signature: str = self.record.get("signature") or ""
        self.video_path: str = self.record.get("videoFeedback") or ""
        self.recorder = VideoRecorder()
        self.scroll_enabled = True

        self.pad = pad or SignaturePad()
        self.pad.on_begin = self._suspend_scroll
        self.pad.on_end = self._resume_scroll

    @property
    def request_id(self) -> str:
        return str(self.record.get("_id") or "")

    def _suspend_scroll(self) -> None:
        self.scroll_enabled = False

    def _resume_scroll(self) -> None:
        self.scroll_enabled = True

    def select_status(self, value: str) -> None:
        self.status = value

    def status_options(self) -> List[Tuple[str, bool]]:
        """Each option paired with whether it is the current selection."""
        return [(option, option == self.status) for option in STATUS_OPTIONS]

    def set_comments(self, text: str) -> None:
        self.comments = text

    def save_signature(self) -> str:
        """Capture the pad's current drawing as the signature."""
        self.signature = self.pad.save()
        logger.info(
            "signature_captured",
            extra={"has_signature": bool(self.signature)},
        )
        return self.signature

    def clear_signature(self) -> None:
        self.signature = ""
        self.pad.reset()
        self.scroll_enabled = True

    def toggle_video(self) -> str:
        return self.recorder.toggle()

    def require_id(self) -> str:
        request_id = self.request_id
        if not request_id:
            raise MissingServiceRequestId()
        return request_id

    def build_payload(self) -> Dict[str, str]:
        """The update body sent to the API. The status is not validated here."""
        return {
            "comments": self.comments,
            "status": self.status,
            "videoFeedback": self.video_path,
            "signature": self.signature,
        }
