"""Main application entry point for VoiceNote."""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import Optional

from voicenote import __version__
from voicenote.audio.capture import PyAudioPlatform
from voicenote.services.notifier import NoticePublisher
from voicenote.services.recording_service import RecordingService
from voicenote.transcription.google_backend import GoogleSpeechClient, DEFAULT_ENDPOINT_URL
from voicenote.ui.console_screen import ConsoleNoteScreen

from .config import VoiceNoteConfig

logger = logging.getLogger(__name__)


def build_service(config: VoiceNoteConfig) -> RecordingService:
    """Wire the audio platform, transcription client and recording service from config."""
    platform = PyAudioPlatform(
        recordings_dir=config.get_recordings_directory(),
        chunk_size=config.get('audio.chunk_size', 1024),
        input_device_index=config.get('audio.input_device_index'),
    )
    client = GoogleSpeechClient(
        api_key=config.get_api_key(),
        endpoint_url=config.get('google_speech.endpoint_url', DEFAULT_ENDPOINT_URL),
        language=config.get('google_speech.language', 'zh-CN'),
        alternative_languages=config.get('google_speech.alternative_languages', ['en-US', 'zh-TW']),
        enable_automatic_punctuation=config.get('google_speech.enable_automatic_punctuation', True),
    )
    logger.info(f"Transcription: {client.service_name} ({client.language}, "
                f"alternatives={client.alternative_languages})")
    return RecordingService(platform, client, notifier=NoticePublisher())


def setup_logging(config: VoiceNoteConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/voicenote.log')
    console_output = config.get('logging.console_output', True)
    
    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)
    
    handlers = []
    
    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)
    
    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)
    
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)
    
    logger.info("="*50)
    logger.info("VoiceNote starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("="*50)


def main(argv: Optional[list] = None) -> None:
    """Main entry point for VoiceNote."""
    parser = argparse.ArgumentParser(
        description="VoiceNote - voice-to-text capture for notes",
        epilog="Press Enter to start/stop recording, q to quit"
    )
    
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: looks for voicenote.yaml)"
    )
    
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version=f"VoiceNote v{__version__}"
    )
    
    args = parser.parse_args(argv)
    
    try:
        config = VoiceNoteConfig(args.config)
        setup_logging(config, args.log_level or config.get('logging.level', 'INFO'))
        service = build_service(config)
        asyncio.run(ConsoleNoteScreen(service).run())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
