"""
Wallet scan emoji definitions.

Used by balance and usage runs to tag progress and findings.
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class ScanEmoji(ComponentEmoji):
    """Wallet checking progress and findings."""

    WALLET = "👛"  # Wallet loaded
    PROGRESS = "⏳"  # Progress update
    BALANCE = "💰"  # Non-zero balance found
    USED = "📈"  # Wallet has transactions
    EMPTY = "⚪"  # Nothing found
    MATCH = "🎯"  # Target address matched
    EXPORT = "📝"  # Results exported
    COMPARE = "🔍"  # Files compared
