"""
Configuration management for the stockbill CLI.
Handles loading and validating configuration from environment variables and .env files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

DEFAULT_DATABASE_URL = 'sqlite:///stockbill.db'

def _flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

@dataclass
class Config:
    """Configuration settings for the stockbill CLI."""

    # Database settings
    database_url: str = DEFAULT_DATABASE_URL

    # Logging settings
    log_level: str = 'INFO'
    log_dir: Optional[Path] = None

    # Output settings
    output_format: str = 'text'  # text, json

    # Runtime settings
    seed_demo_data: bool = True
    recent_invoice_limit: int = 5

    # Import settings
    batch_size: int = 100

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance

        Raises:
            ValueError: If a numeric setting is not a number
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        try:
            recent_invoice_limit = int(os.getenv('RECENT_INVOICE_LIMIT', '5'))
            batch_size = int(os.getenv('BATCH_SIZE', '100'))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}")

        return cls(
            database_url=os.getenv('DATABASE_URL') or DEFAULT_DATABASE_URL,
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            log_dir=Path(os.getenv('LOG_DIR')) if os.getenv('LOG_DIR') else None,
            output_format=os.getenv('OUTPUT_FORMAT', 'text').lower(),
            seed_demo_data=_flag(os.getenv('SEED_DEMO_DATA'), True),
            recent_invoice_limit=recent_invoice_limit,
            batch_size=batch_size
        )

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid

        Raises:
            ValueError: On the first invalid setting
        """
        if self.log_dir and not self.log_dir.exists():
            try:
                self.log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ValueError(f"Failed to create log directory: {e}")

        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.recent_invoice_limit <= 0:
            raise ValueError("recent_invoice_limit must be positive")

        valid_formats = ['text', 'json']
        if self.output_format not in valid_formats:
            raise ValueError(f"output_format must be one of: {', '.join(valid_formats)}")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")

        return True
