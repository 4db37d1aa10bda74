"""
Wallet file codec.

Text layouts:
    wallet list     privateKey - address
    balance export  privateKey - address - CHAIN: 1.500000 ETH, BNB: ...
    usage export    privateKey,address,nonce,fileName
"""

import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import ValidationError, WalletFileParseError

logger = logging.getLogger(__name__)

SEPARATOR = " - "
CHUNK_THRESHOLD = 100_000
CHUNK_SIZE = 50_000


def parse_wallet_text(content: str, file_name: str = "<input>") -> List[Wallet]:
    """
    Parse a wallet list.

    Blank lines and lines without exactly one " - " separator are skipped.
    A line with the separator but an invalid key or address is an error.

    Raises:
        WalletFileParseError: With the 1-based line number of the bad line
    """
    wallets = []
    for line_no, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        parts = line.split(SEPARATOR)
        if len(parts) != 2:
            continue
        private_key, address = parts[0].strip(), parts[1].strip()
        try:
            wallets.append(Wallet(address=address, private_key=private_key))
        except ValidationError as e:
            raise WalletFileParseError(file_name, e.message, line=line_no)
    return wallets


def read_wallet_file(path: str) -> List[Wallet]:
    """
    Raises:
        WalletFileParseError: If the file is unreadable or malformed
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WalletFileParseError(file_path.name, f"cannot read file: {e}")
    return parse_wallet_text(content, file_path.name)


def parse_wallet_files(
    paths: Sequence[str],
) -> Tuple[Dict[str, List[Wallet]], Dict[str, WalletFileParseError]]:
    """
    Read several wallet files; each file fails independently.

    Returns:
        (file name -> wallets, file name -> error)
    """
    parsed: Dict[str, List[Wallet]] = {}
    errors: Dict[str, WalletFileParseError] = {}
    for path in paths:
        name = Path(path).name
        try:
            parsed[name] = read_wallet_file(path)
        except WalletFileParseError as e:
            logger.warning(f"Skipping {name}: {e.message}")
            errors[name] = e
    return parsed, errors


def serialize_wallets(wallets: Iterable[Wallet]) -> str:
    return "\n".join(f"{w.private_key}{SEPARATOR}{w.address}" for w in wallets)


def default_export_name(prefix: str = "wallet", now: Optional[datetime] = None) -> str:
    """e.g. wallet_2024-05-01T12-30-00.txt"""
    now = now or datetime.now(timezone.utc)
    return f"{prefix}_{now.strftime('%Y-%m-%dT%H-%M-%S')}.txt"


def chunk_file_names(base_name: str, total_chunks: int) -> List[str]:
    if total_chunks <= 1:
        return [base_name]
    stem = base_name[:-4] if base_name.endswith(".txt") else base_name
    return [f"{stem}_part{i}_of_{total_chunks}.txt" for i in range(1, total_chunks + 1)]


def plan_wallet_export(
    wallets: Sequence[Wallet],
    base_name: str,
    chunk_threshold: int = CHUNK_THRESHOLD,
    chunk_size: int = CHUNK_SIZE,
) -> List[Tuple[str, str]]:
    """
    Split a wallet list export into (file name, content) parts.

    Lists above chunk_threshold wallets are written in parts of
    chunk_size named <base>_partK_of_N.txt.
    """
    if len(wallets) <= chunk_threshold:
        return [(base_name, serialize_wallets(wallets))]

    total_chunks = math.ceil(len(wallets) / chunk_size)
    names = chunk_file_names(base_name, total_chunks)
    return [
        (names[i], serialize_wallets(wallets[i * chunk_size:(i + 1) * chunk_size]))
        for i in range(total_chunks)
    ]


def write_wallet_export(
    wallets: Sequence[Wallet],
    output_dir: str,
    base_name: Optional[str] = None,
    chunk_threshold: int = CHUNK_THRESHOLD,
    chunk_size: int = CHUNK_SIZE,
) -> List[Path]:
    """Write a wallet list export and return the written paths."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for name, content in plan_wallet_export(
        wallets, base_name or default_export_name(), chunk_threshold, chunk_size
    ):
        path = directory / name
        path.write_text(content, encoding="utf-8")
        written.append(path)
    logger.info(f"Exported {len(wallets)} wallets to {len(written)} file(s)")
    return written


def format_balance_line(wallet: Wallet, balances: Mapping[str, str]) -> str:
    """
    Args:
        wallet: Wallet with a non-zero balance
        balances: Chain -> "<formatted> <SYMBOL>", in run order
    """
    parts = ", ".join(f"{chain}: {amount}" for chain, amount in balances.items())
    return f"{wallet.private_key}{SEPARATOR}{wallet.address}{SEPARATOR}{parts}"


def format_usage_line(wallet: Wallet, nonce: int, file_name: str) -> str:
    return f"{wallet.private_key},{wallet.address},{nonce},{file_name}"
