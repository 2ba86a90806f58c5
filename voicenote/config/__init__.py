"""Simple YAML configuration loader for VoiceNote."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "voicenote.yaml"


class VoiceNoteConfig:
    """VoiceNote configuration loader."""
    
    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.
        
        Args:
            config_path: Path to YAML config file. If None, looks for voicenote.yaml 
                        in current directory and parent directories.
        """
        if config_path:
            self.config_file = Path(config_path)
        else:
            self.config_file = self._find_config_file()
        
        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
        
        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()
    
    @staticmethod
    def _find_config_file() -> Path:
        """Walk up from the current directory looking for voicenote.yaml."""
        current = Path.cwd()
        for directory in [current, *current.parents]:
            candidate = directory / DEFAULT_CONFIG_FILENAME
            if candidate.exists():
                return candidate
        return current / DEFAULT_CONFIG_FILENAME
    
    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration: {e}") from e
        
        if not config:
            raise ValueError("Configuration file is empty")
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")
        
        # Resolve relative paths
        self._resolve_paths(config)
        
        logger.info("Configuration loaded successfully")
        return config
    
    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent
        
        # Resolve recordings directory
        audio = config.get('audio')
        if isinstance(audio, dict) and audio.get('recordings_directory'):
            recordings_dir = audio['recordings_directory']
            if not os.path.isabs(recordings_dir):
                audio['recordings_directory'] = str(config_dir / recordings_dir)
        
        # Resolve log file path
        logging_section = config.get('logging')
        if isinstance(logging_section, dict) and logging_section.get('file_path'):
            log_path = logging_section['file_path']
            if not os.path.isabs(log_path):
                logging_section['file_path'] = str(config_dir / log_path)
    
    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'google_speech.language').
        
        Args:
            key_path: Dot-separated key path (e.g., 'google_speech.api_key')
            default: Default value if key not found
            
        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config
        
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        
        return value
    
    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.
        
        Args:
            key_path: Dot-separated path to config value (e.g., 'google_speech.language')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config
        
        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]
        
        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' updated")
    
    def get_api_key(self) -> str:
        """Get the speech API key - CRASHES if not configured."""
        api_key = self.get('google_speech.api_key')
        if not api_key:
            raise ValueError(f"Google Speech API key not configured in {self.config_file.name}")
        return str(api_key)
    
    def get_recordings_directory(self) -> Optional[str]:
        """Get directory for capture artifacts, None for the system temp directory."""
        recordings_dir = self.get('audio.recordings_directory')
        if not recordings_dir:
            return None
        return str(Path(recordings_dir).absolute())
