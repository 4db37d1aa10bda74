"""
Wallet derivation from a private key.
"""

from eth_account import Account

from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import ValidationError


def normalize_private_key(private_key: str) -> str:
    key = (private_key or "").strip()
    if not key.lower().startswith("0x"):
        key = "0x" + key
    return "0x" + key[2:].lower()


def derive_wallet(private_key: str) -> Wallet:
    """
    Derive the checksummed address for a private key.

    Args:
        private_key: 64 hex characters, with or without 0x

    Returns:
        Wallet with checksum address and 0x-prefixed key

    Raises:
        ValidationError: If the key is not a valid secp256k1 key
    """
    key = normalize_private_key(private_key)
    try:
        account = Account.from_key(key)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid private key: {e}")
    return Wallet(address=account.address, private_key=key)
