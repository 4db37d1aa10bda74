"""Emoji definitions for system reporting."""

from shared.reporter.emojis.base_emojis import ComponentEmoji
from shared.reporter.emojis.errors_emojis import ErrorEmoji
from shared.reporter.emojis.network_emojis import NetworkEmoji
from shared.reporter.emojis.scan_emojis import ScanEmoji
from shared.reporter.emojis.system_emojis import SystemEmoji

__all__ = [
    "ComponentEmoji",
    "ErrorEmoji",
    "NetworkEmoji",
    "ScanEmoji",
    "SystemEmoji",
]
