import logging
import re
import sys
from io import StringIO
from typing import Any

import pydantic
from colorlog import ColoredFormatter
from rich.console import Console
from rich.pretty import Pretty
from rich.theme import Theme

# Rich theme used when a log record carries a non-string payload
log_theme = Theme(
    {
        "repr.tag_name": "bold magenta",
        "repr.attrib_name": "yellow",
        "repr.attrib_value": "green",
        "repr.number": "cyan",
        "repr.none": "dim",
    }
)

_ANSI_NAME = "\033[1;95m"
_ANSI_KEY = "\033[33m"
_ANSI_RESET = "\033[0m"


def _short_value(value: Any) -> str:
    """Render a field value compactly for single-line model output."""
    if isinstance(value, str):
        return f"'{value[:27]}...'" if len(value) > 30 else f"'{value}'"
    if isinstance(value, list | tuple):
        if len(value) <= 3:
            inner = ", ".join(_short_value(item) for item in value)
            return f"[{inner}]" if isinstance(value, list) else f"({inner})"
        return f"[{len(value)} items]"
    if isinstance(value, dict):
        if len(value) <= 2:
            return "{" + ", ".join(f"{k}: {_short_value(v)}" for k, v in value.items()) + "}"
        return f"{{{len(value)} items}}"
    text = repr(value)
    return text if len(text) <= 30 else text[:27] + "..."


def format_pydantic(
    model: pydantic.BaseModel, max_line_length: int = 80, color: bool = True
) -> str:
    """
    Format a Pydantic model for use in f-strings and log messages.

    Args:
        model: A Pydantic model instance
        max_line_length: Maximum length for single-line representation
        color: Whether to apply ANSI color formatting

    Returns:
        Formatted string representation of the model
    """
    if not isinstance(model, pydantic.BaseModel):
        return str(model)

    name = model.__class__.__name__
    fields = model.model_dump()
    plain = [f"{key}={_short_value(value)}" for key, value in fields.items()]

    if color:
        head = f"{_ANSI_NAME}{name}{_ANSI_RESET}"
        parts = [
            f"{_ANSI_KEY}{key}{_ANSI_RESET}={_short_value(value)}" for key, value in fields.items()
        ]
    else:
        head = name
        parts = plain

    if len(f"{name}({', '.join(plain)})") <= max_line_length:
        return f"{head}({', '.join(parts)})"

    lines = [f"{head}("] + [f"    {part}," for part in parts] + [")"]
    return "\n".join(lines)


class RichReprFormatter(ColoredFormatter):
    """
    Colored formatter that pretty-prints pydantic models and containers
    passed directly as log messages.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.string_console = Console(highlight=True, width=120, theme=log_theme, file=StringIO())

    def _pretty(self, obj: Any) -> str:
        self.string_console.file = StringIO()
        self.string_console.print(Pretty(obj))
        return self.string_console.file.getvalue().strip()

    def format(self, record):
        if isinstance(record.msg, pydantic.BaseModel):
            record.msg = format_pydantic(record.msg)
        elif not isinstance(record.msg, str | int | float | bool | type(None)):
            record.msg = self._pretty(record.msg)

        # Shorten pathname to start from 'addressmap/'
        match = re.search(r"(addressmap/.*?)$", record.pathname or "")
        if match:
            record.pathname = match.group(1)

        return super().format(record)


def setup_logging(name=None, level="INFO"):
    """
    Set up the shared 'addressmap' logger with a colored console handler.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("addressmap")
    logger.setLevel(numeric_level)
    logger.propagate = True

    # Remove any existing handlers to avoid duplicates
    if logger.handlers:
        logger.handlers = []

    formatter = RichReprFormatter(
        "%(asctime)s - %(log_color)s%(levelname)s%(reset)s - %(pathname)s:%(bold)s%(lineno)d%(reset)s - %(bold)s%(funcName)s%(reset)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={
            "bold": {level_name: "bold" for level_name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")}
        },
        style="%",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
