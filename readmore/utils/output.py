"""Shared console output utilities."""

import json
from typing import Any

from rich.console import Console

# Shared console instance for all CLI output
# soft_wrap keeps report lines (id lists) on one line for piping
console = Console(soft_wrap=True)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout.

    Handles common non-serializable types like dates by converting them to strings.
    """
    print(json.dumps(data, indent=2, default=str))
