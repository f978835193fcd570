"""Formatting of generated Go source."""

import re
import shutil
import subprocess

from ..golang.parser import GoSyntaxError, parse_source
from .errors import FormatError

_BLANK_LINES_RE = re.compile(r"\n{3,}")


def format_source(text: str) -> str:
    """Check that text parses as Go and normalize its whitespace."""
    try:
        parse_source(text, "<generated>")
    except GoSyntaxError as e:
        raise FormatError(f"Generated source does not parse: {e}") from e

    lines = [line.rstrip() for line in text.splitlines()]
    text = _BLANK_LINES_RE.sub("\n\n", "\n".join(lines))
    return text.strip("\n") + "\n"


def run_gofmt(text: str, gofmt: str = "gofmt") -> str:
    """Format text with the gofmt binary."""
    executable = shutil.which(gofmt)
    if executable is None:
        raise FormatError(f"{gofmt} not found in PATH")

    try:
        result = subprocess.run(
            [executable],
            input=text,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise FormatError(e.stderr.strip() or f"{gofmt} exited with status {e.returncode}") from e
    return result.stdout
