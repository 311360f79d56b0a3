"""Rich formatters for CLI output.

This module provides a shared Console instance and exports all formatters
for consistent terminal output across the Evokit CLI.

Semantic Colors:
- green: success
- yellow: warning
- red: error
- blue: info
"""

from rich.console import Console
from rich.theme import Theme

EVOKIT_THEME = Theme(
    {
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "info": "blue",
        "muted": "dim",
        "highlight": "bold cyan",
    }
)

# Shared Console instance for all CLI modules
console = Console(theme=EVOKIT_THEME)

__all__ = ["console", "EVOKIT_THEME"]
