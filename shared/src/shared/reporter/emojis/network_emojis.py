"""
Network and RPC emoji definitions.

Usage:
    >>> from shared.reporter.emojis import NetworkEmoji
    >>> print(f"{NetworkEmoji.RPC} eth_getBalance")
    ⚡ eth_getBalance
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class NetworkEmoji(ComponentEmoji):
    """Endpoint connectivity and JSON-RPC traffic."""

    # ============================================================
    # Endpoint States
    # ============================================================

    CONNECTED = "🔗"  # Endpoint answered
    DISCONNECTED = "⚠️"  # Endpoint unreachable
    FALLBACK = "🔀"  # Switched to fallback endpoint
    TIMEOUT = "⏱️"  # Request timed out

    # ============================================================
    # Protocol
    # ============================================================

    RPC = "⚡"  # JSON-RPC call
    HTTP = "🔌"  # Plain HTTP fetch
    DOWNLOAD = "⬇️"  # Remote file fetched
