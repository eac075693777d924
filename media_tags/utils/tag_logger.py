"""
Debug logger for generated markup and URLs.

Supports configurable log levels (NONE, INFO, DEBUG, TRACE) and dual output:
- Console: Human-readable formatted output
- File: JSON Lines format for parsing and analysis
"""

import json
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


class LogLevel(Enum):
    """Logging levels for markup debug output."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


class TagLogger:
    """Centralized logger for tag and URL generation with configurable levels."""

    _instance: Optional["TagLogger"] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger with configuration from environment."""
        if self._initialized:
            return

        load_dotenv()

        level_str = os.getenv("MEDIA_DEBUG_LEVEL", "NONE").upper()
        try:
            self.level = LogLevel[level_str]
        except KeyError:
            self.level = LogLevel.NONE

        self.log_to_file = os.getenv("MEDIA_LOG_TO_FILE", "false").lower() == "true"
        self.log_dir = Path(os.getenv("MEDIA_LOG_DIR", "outputs"))

        self._initialized = True

    def _should_log(self, min_level: LogLevel) -> bool:
        """Check if we should log at the given level."""
        return self.level.value >= min_level.value

    def _format_timestamp(self) -> str:
        """Get ISO8601 formatted timestamp."""
        return datetime.now().isoformat()

    def _truncate_content(self, content: str, max_len: int = 200) -> str:
        """Truncate content for preview."""
        if len(content) <= max_len:
            return content
        return content[:max_len] + "... [truncated]"

    def _write_to_file(self, log_entry: Dict[str, Any]):
        """Append log entry to the JSON Lines file."""
        if not self.log_to_file:
            return

        log_file = self.log_dir / "logs" / "tag_calls.jsonl"
        log_file.parent.mkdir(parents=True, exist_ok=True)

        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")

    def log_markup(
        self,
        component: str,
        name: str,
        output: Optional[str],
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Log a generated tag or URL.

        Args:
            component: Component name (e.g., "image", "video", "upload")
            name: Public ID, field name or other identifier of the subject
            output: Generated markup or URL
            metadata: Optional options or extra details
        """
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        output = output or ""

        print(f"[{timestamp}] 🔵 Markup: [{component}] {name} | {len(output)} chars")

        if self._should_log(LogLevel.TRACE):
            print(f"  Output: {output}")
            if metadata:
                print(f"  Metadata: {json.dumps(metadata, default=str)}")
        elif self._should_log(LogLevel.DEBUG):
            print(f"  Output: {self._truncate_content(output)}")

        log_entry = {
            "timestamp": timestamp,
            "level": self.level.name,
            "component": component,
            "name": name,
            "output": output if self.level == LogLevel.TRACE else None,
            "output_preview": (
                self._truncate_content(output)
                if self.level.value >= LogLevel.DEBUG.value
                else None
            ),
            "output_length": len(output),
            "metadata": (metadata or {}) if self.level == LogLevel.TRACE else {},
        }

        self._write_to_file(log_entry)

    def log_error(self, component: str, error: Exception):
        """Log a failure before it propagates to the caller."""
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        print(f"[{timestamp}] ❌ Markup Error: [{component}] {type(error).__name__}: {error}")

        self._write_to_file({
            "timestamp": timestamp,
            "level": self.level.name,
            "component": component,
            "error": {"type": type(error).__name__, "message": str(error)},
        })


def get_logger() -> TagLogger:
    """Get the singleton logger instance."""
    return TagLogger()


def reset_logger():
    """Forget the singleton so the next get_logger() re-reads the environment."""
    TagLogger._instance = None
