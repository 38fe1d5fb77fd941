"""Exit codes for the vidwatch command.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    20-29: Target/file errors
    30-39: Tool/dependency errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for the vidwatch command."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1  # Includes a lost filesystem subscription
    INTERRUPTED = 2

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30
    SUBSCRIPTION_FAILED = 33
