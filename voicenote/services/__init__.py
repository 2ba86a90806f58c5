"""Services layer for VoiceNote application logic."""

from .notifier import NoticePublisher, NOTICE_TOPIC
from .recording_service import RecordingService

__all__ = [
    "NoticePublisher",
    "NOTICE_TOPIC",
    "RecordingService",
]
