"""ANSI color codes for colored catalog log output.

All colors use the 256-color palette.

Usage:
    from sysflow_core.logging.colors import GREEN, RESET

    print(f"{GREEN}registered{RESET}")
"""

RESET = "\033[0m"

# Status
GREEN = "\033[38;5;82m"  # Accepted definitions
RED = "\033[38;5;196m"  # Rejected definitions
YELLOW = "\033[38;5;226m"  # Warnings

# Information
LIGHT_BLUE = "\033[38;5;153m"  # Context payloads
CYAN = "\033[38;5;51m"  # Info
MAGENTA = "\033[38;5;201m"  # Registry component tag
ORANGE = "\033[38;5;208m"  # Config component tag

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
    "ORANGE",
]
