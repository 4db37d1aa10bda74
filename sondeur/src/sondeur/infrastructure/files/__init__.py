"""
File formats - wallet lists, exports, target lists.
"""

from sondeur.infrastructure.files.target_list import (
    fetch_targets,
    parse_targets,
    read_targets,
)
from sondeur.infrastructure.files.wallet_file_codec import (
    chunk_file_names,
    default_export_name,
    format_balance_line,
    format_usage_line,
    parse_wallet_files,
    parse_wallet_text,
    plan_wallet_export,
    read_wallet_file,
    serialize_wallets,
    write_wallet_export,
)

__all__ = [
    "chunk_file_names",
    "default_export_name",
    "fetch_targets",
    "format_balance_line",
    "format_usage_line",
    "parse_targets",
    "parse_wallet_files",
    "parse_wallet_text",
    "plan_wallet_export",
    "read_targets",
    "read_wallet_file",
    "serialize_wallets",
    "write_wallet_export",
]
