"""
Base command infrastructure for the stockbill CLI.
Provides common functionality and utilities for all commands.
"""

import click
import dataclasses
import enum
import json
import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from .config import Config

from ..app import Application
from ..errors import StockbillError, ValidationError
from ..processors.error_tracker import ErrorTracker

def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    # Seed demo data into empty storage before the command runs
    bootstrap = True

    def __init__(self, config: Config):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.error_tracker = ErrorTracker()
        self._app: Optional[Application] = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.obj = ctx.obj if ctx and isinstance(ctx.obj, dict) else {}
        self.debug = bool(self.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def app(self) -> Application:
        """Application for this invocation, shared through the click context."""
        if self._app is None:
            app = self.obj.get('app')
            if app is None:
                if self.debug:
                    self.logger.debug(f"Opening application on {self.config.database_url}")
                app = Application(self.config, error_tracker=self.error_tracker, debug=self.debug)
                if self.bootstrap:
                    app.bootstrap()
                self.obj['app'] = app
            self._app = app
        return self._app

    @property
    def json_output(self) -> bool:
        return self.config.output_format == 'json'

    def emit(self, payload: Any, lines: Callable[[], Iterable[str]]) -> None:
        """Print ``payload`` as JSON, or the text ``lines`` otherwise."""
        if self.json_output:
            click.echo(json.dumps(payload, default=_json_default, indent=2))
        else:
            for line in lines():
                click.echo(line)

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

    def validate(self) -> bool:
        """Validate command configuration and requirements.

        Returns:
            bool: True if validation passes, False otherwise
        """
        if self.debug:
            self.logger.debug("Validating command configuration")
        return True

class FileInputCommand(BaseCommand):
    """Base class for commands that process input files."""

    def __init__(self, config: Config, input_file: Path):
        super().__init__(config)
        self.input_file = input_file

    def validate(self) -> bool:
        """Validate input file exists and is readable."""
        if not super().validate():
            return False

        if not self.input_file.exists():
            self.logger.error(f"Input file not found: {self.input_file}")
            return False

        if not self.input_file.is_file():
            self.logger.error(f"Input path is not a file: {self.input_file}")
            return False

        return True

def command_error_handler(f):
    """Decorator to handle command execution errors consistently.

    Domain errors become a click error with their message; anything else is
    recorded and aborts the command.
    """
    @wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")

        try:
            result = f(self, *args, **kwargs)
        except click.ClickException:
            raise
        except ValidationError as e:
            self.error_tracker.add_error('VALIDATION_ERROR', str(e), {'command': self.__class__.__name__})
            for field_name, message in e.errors.items():
                click.secho(f"  {field_name}: {message}", fg='red', err=True)
            raise click.ClickException("Validation failed")
        except StockbillError as e:
            self.error_tracker.add_error('COMMAND_EXECUTION_ERROR', str(e), {'command': self.__class__.__name__})
            raise click.ClickException(str(e))
        except Exception as e:
            self.error_tracker.add_error(
                'COMMAND_EXECUTION_ERROR',
                f"Command failed: {str(e)}",
                {
                    'command': self.__class__.__name__,
                    'args': str(args),
                    'kwargs': str(kwargs),
                    'error': str(e)
                }
            )
            self.logger.error(f"Command failed: {str(e)}")
            if self.debug:
                self.logger.debug("Command failure details:", exc_info=True)
            raise click.Abort()

        if self.debug:
            self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
        return result
    return wrapper
