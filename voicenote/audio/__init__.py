"""Audio capture module."""

from .base import AbstractAudioPlatform, AbstractCaptureHandle
from .capture import PyAudioPlatform, PyAudioCaptureHandle

__all__ = [
    'AbstractAudioPlatform',
    'AbstractCaptureHandle',
    'PyAudioPlatform',
    'PyAudioCaptureHandle',
]
