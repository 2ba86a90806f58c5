"""Terminal user interface for VoiceNote."""

from .console_screen import ConsoleNoteScreen

__all__ = ["ConsoleNoteScreen"]
