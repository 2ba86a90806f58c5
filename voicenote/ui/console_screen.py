"""Console note screen: toggles recording and receives transcripts."""

import asyncio
import logging
from typing import List, Optional

from pubsub import pub
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models.notices import Notice, NoticeLevel
from ..models.transcription import TranscriptResult, TranscriptionOutcome
from ..services.notifier import NOTICE_TOPIC
from ..services.recording_service import RecordingService

logger = logging.getLogger(__name__)

_NOTICE_STYLES = {
    NoticeLevel.INFO: "blue",
    NoticeLevel.WARNING: "yellow",
    NoticeLevel.ERROR: "red",
}

_FIELD_LABELS = {
    "transcription": "Transcription",
    "english": "English",
    "simplifiedChinese": "Simplified Chinese",
    "traditionalChinese": "Traditional Chinese",
    "italian": "Italian",
    "spanish": "Spanish",
    "japanese": "Japanese",
    "korean": "Korean",
}


class ConsoleNoteScreen:
    """Terminal stand-in for the note editor.

    Registers itself as the transcript consumer while running and renders
    notices published by the recording service.
    """
    
    def __init__(self, service: RecordingService, console: Optional[Console] = None,
                 notice_topic: str = NOTICE_TOPIC):
        self.service = service
        self.console = console or Console()
        self.notice_topic = notice_topic
        self.transcripts: List[TranscriptResult] = []
        self.running = False
    
    def on_transcription(self, result: TranscriptResult) -> None:
        """Transcript handler registered with the recording service."""
        self.transcripts.append(result)
        table = Table(show_header=False, box=None)
        for key, value in result.to_dict().items():
            table.add_row(f"[bold]{_FIELD_LABELS[key]}[/bold]", value)
        self.console.print(Panel(table, title="📝 New note text", border_style="green"))
    
    def on_notice(self, notice: Notice) -> None:
        style = _NOTICE_STYLES[notice.level]
        self.console.print(Panel(notice.message, title=notice.title, border_style=style))
    
    def show_status(self) -> None:
        if self.service.is_recording:
            self.console.print("🔴 RECORDING - press Enter to stop", style="bold red")
        elif self.service.is_processing:
            self.console.print("⏳ PROCESSING...", style="bold yellow")
        else:
            self.console.print("⏹️  IDLE - press Enter to record, q to quit", style="bold blue")
    
    async def handle_command(self, command: str) -> bool:
        """Handle one line of input.
        
        Returns:
            False when the user asked to quit
        """
        command = command.strip().lower()
        if command in ("q", "quit", "exit"):
            if self.service.is_recording:
                await self.service.stop_recording()
            return False
        
        outcome: Optional[TranscriptionOutcome] = await self.service.toggle_recording()
        if outcome is not None:
            logger.info(f"Recording finished: {outcome.status.value}")
        return True
    
    async def run(self) -> None:
        """Interactive loop until the user quits."""
        self.service.register_handler(self.on_transcription)
        pub.subscribe(self.on_notice, self.notice_topic)
        self.running = True
        
        self.console.print("🎙️  VoiceNote", style="bold blue")
        self.console.print("=" * 50)
        try:
            while self.running:
                self.show_status()
                line = await asyncio.to_thread(self.console.input, "> ")
                self.running = await self.handle_command(line)
        finally:
            self.running = False
            pub.unsubscribe(self.on_notice, self.notice_topic)
            self.service.unregister_handler()
