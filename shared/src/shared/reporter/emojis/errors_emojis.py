"""
Error and warning level emoji definitions.

Usage:
    >>> from shared.reporter.emojis import ErrorEmoji
    >>> print(f"{ErrorEmoji.RETRY} Attempt 2/3")
    🔄 Attempt 2/3
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class ErrorEmoji(ComponentEmoji):
    """Error levels and recovery indicators."""

    # ============================================================
    # Severity Levels
    # ============================================================

    CRITICAL = "🔴"  # Run aborted
    ERROR = "❌"  # Operation failed
    WARNING = "⚠️"  # Potential issue
    DEBUG = "🐛"  # Debug information

    # ============================================================
    # Recovery Operations
    # ============================================================

    RETRY = "🔄"  # Retry attempt
    EXHAUSTED = "🚫"  # All attempts used up
    INDETERMINATE = "❔"  # Result could not be determined
