"""
System-level operations and lifecycle emoji definitions.
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class SystemEmoji(ComponentEmoji):
    """System-level operations and lifecycle events."""

    # ============================================================
    # Lifecycle Operations
    # ============================================================
    STARTUP = "🚀"  # Run started
    SHUTDOWN = "🛑"  # Run stopped
    READY = "✅"  # Component initialized successfully
    CANCEL = "✋"  # Cancellation requested

    # ============================================================
    # Configuration
    # ============================================================
    CONFIG = "⚙️"  # Configuration operation
    CONFIG_LOAD = "📋"  # Configuration loading
    CONFIG_ERROR = "❌"  # Configuration error

    # ============================================================
    # Storage
    # ============================================================
    SAVE = "💾"  # Persisted state written
    LOAD = "📂"  # Persisted state read
    DELETE = "🗑️"  # Persisted entry removed
