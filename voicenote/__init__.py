"""VoiceNote - voice-to-text capture for note taking."""

__version__ = "0.1.0"
