from __future__ import annotations
import sys
import traceback
from typing import Any, Callable, Dict, Optional, TextIO
from rich.console import Console
from ..config import ReporterConfig
from ..events import EventKind
from ..runners.results import Error

def format_seconds(ms: float) -> str:
    seconds = ms / 1000
    return str(int(seconds)) if seconds == int(seconds) else repr(seconds)

def format_error(error: Error) -> str:
    if isinstance(error, BaseException):
        return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()
    if error.stack:
        return error.stack
    return f"{error.name}: {error.message}"

class Reporter:
    def __init__(self, config: Optional[ReporterConfig] = None, output: Optional[TextIO] = None):
        self.config = config or ReporterConfig()
        self.output = output or sys.stdout
        self.console = Console(file=self.output, soft_wrap=True, highlight=False)

    def handlers(self) -> Dict[EventKind, Callable[..., Any]]:
        return {}

    def format_error(self, error: Error) -> str:
        return format_error(error)
