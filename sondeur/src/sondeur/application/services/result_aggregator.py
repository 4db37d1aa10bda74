"""
Result aggregation - balance reports, usage statistics, exports.

Wei amounts stay integer strings end to end; format_balance() is the
only place they are turned into display decimals.
"""

import math
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    TypeVar,
)

from sondeur.domain.entities import (
    BalanceResult,
    UsageStatus,
    Wallet,
    WalletBalanceReport,
    WalletUsageReport,
    parse_wei,
)
from sondeur.domain.exceptions import ValidationError
from sondeur.infrastructure.files import format_balance_line, format_usage_line

T = TypeVar("T")

DISPLAY_DECIMALS = 6
ZERO_DISPLAY = "0." + "0" * DISPLAY_DECIMALS

USAGE_FILTERS = ("used", "unused", "with_balance", "with_transactions")


def has_balance(balance_wei: Any) -> bool:
    """True iff the amount parses to an integer strictly greater than zero."""
    try:
        return parse_wei(balance_wei) > 0
    except (ValueError, TypeError):
        return False


def format_balance(wei: Any, decimals: int = 18) -> str:
    """
    Render a wei amount with 6 truncated fractional digits.

    Examples:
        "1500000000000000000" -> "1.500000"
        "0x3e8"               -> "0.000000"
        "garbage"             -> "0.000000"
    """
    try:
        amount = parse_wei(wei)
    except (ValueError, TypeError):
        return ZERO_DISPLAY

    divisor = 10 ** decimals
    whole = amount // divisor
    fraction = str(amount % divisor).zfill(decimals)[:DISPLAY_DECIMALS]
    return f"{whole}.{fraction}"


def check_wallet_match(wallet: Wallet, targets: Iterable[str]) -> bool:
    """Case-insensitive membership of wallet.address in targets."""
    if not isinstance(targets, (set, frozenset)):
        targets = {t.lower() for t in targets}
    return wallet.normalized_address in targets


def match_wallets(wallets: Iterable[Wallet], targets: Iterable[str]) -> List[Wallet]:
    target_set: Set[str] = {t.lower() for t in targets}
    return [w for w in wallets if check_wallet_match(w, target_set)]


def build_balance_reports(
    wallets: Sequence[Wallet], results: Iterable[BalanceResult]
) -> List[WalletBalanceReport]:
    """
    Group per-(wallet, chain) results into one report per wallet.

    Wallets keep their input order; wallets without any result (run
    cancelled before reaching them) are left out.
    """
    grouped: Dict[str, Dict[str, BalanceResult]] = {}
    for result in results:
        grouped.setdefault(result.wallet_address.lower(), {})[result.chain_id] = result

    reports = []
    seen = set()
    for wallet in wallets:
        key = wallet.normalized_address
        if key in grouped and key not in seen:
            seen.add(key)
            reports.append(WalletBalanceReport(wallet=wallet, balances=grouped[key]))
    return reports


def balance_summary(
    result: BalanceResult, decimals: int = 18, include_raw: bool = True
) -> str:
    """e.g. "1.500000 ETH (1500000000000000000 wei)"."""
    text = f"{format_balance(result.balance_wei, decimals)} {result.symbol}"
    if include_raw:
        text += f" ({result.balance_wei} wei)"
    return text


def export_balance_reports(
    reports: Iterable[WalletBalanceReport],
    decimals: Optional[Mapping[str, int]] = None,
    include_raw: bool = True,
) -> str:
    """
    One line per wallet holding funds on at least one chain.

    Args:
        reports: Balance reports
        decimals: Chain id -> decimals (default 18)
        include_raw: Append the exact wei amount after each chain
    """
    decimals = decimals or {}
    lines = []
    for report in reports:
        nonzero = report.nonzero_balances
        if not nonzero:
            continue
        amounts = {
            chain: balance_summary(result, decimals.get(chain, 18), include_raw)
            for chain, result in nonzero.items()
        }
        lines.append(format_balance_line(report.wallet, amounts))
    return "\n".join(lines)


@dataclass(frozen=True)
class UsageStatistics:
    total: int
    used: int
    unused: int
    with_balance: int
    with_transactions: int
    indeterminate: int

    def _pct(self, count: int) -> float:
        return count / self.total * 100 if self.total > 0 else 0.0

    @property
    def used_percentage(self) -> float:
        return self._pct(self.used)

    @property
    def with_balance_percentage(self) -> float:
        return self._pct(self.with_balance)

    @property
    def with_transactions_percentage(self) -> float:
        return self._pct(self.with_transactions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "used": self.used,
            "unused": self.unused,
            "with_balance": self.with_balance,
            "with_transactions": self.with_transactions,
            "indeterminate": self.indeterminate,
            "used_percentage": self.used_percentage,
            "with_balance_percentage": self.with_balance_percentage,
            "with_transactions_percentage": self.with_transactions_percentage,
        }


def usage_statistics(statuses: Sequence[UsageStatus]) -> UsageStatistics:
    total = len(statuses)
    used = sum(1 for s in statuses if s.is_used)
    return UsageStatistics(
        total=total,
        used=used,
        unused=total - used,
        with_balance=sum(1 for s in statuses if s.has_balance),
        with_transactions=sum(1 for s in statuses if s.has_transactions),
        indeterminate=sum(1 for s in statuses if not s.resolved),
    )


def _usage_predicate(filter_type: str):
    if filter_type == "used":
        return lambda s: s.is_used
    if filter_type == "unused":
        return lambda s: not s.is_used
    if filter_type == "with_balance":
        return lambda s: s.has_balance
    if filter_type == "with_transactions":
        return lambda s: s.has_transactions
    raise ValidationError(
        f"Unknown usage filter '{filter_type}'. Must be one of: {list(USAGE_FILTERS)}"
    )


def filter_wallets_by_usage(
    wallets: Sequence[Wallet],
    statuses: Sequence[Optional[UsageStatus]],
    filter_type: str,
) -> List[Wallet]:
    """
    Select wallets whose positional status matches filter_type.

    Wallets without a status (missing or None) are skipped.

    Raises:
        ValidationError: Unknown filter_type
    """
    predicate = _usage_predicate(filter_type)
    selected = []
    for index, wallet in enumerate(wallets):
        status = statuses[index] if index < len(statuses) else None
        if status is not None and predicate(status):
            selected.append(wallet)
    return selected


def sort_newest_first(items: Iterable[T], key: str = "checked_at") -> List[T]:
    """Stable sort on a datetime attribute, newest first."""
    return sorted(items, key=lambda item: getattr(item, key), reverse=True)


def page_count(total: int, per_page: int) -> int:
    return max(1, math.ceil(total / per_page)) if per_page > 0 else 1


def paginate(items: Sequence[T], page: int = 1, per_page: int = 20) -> List[T]:
    """
    1-based page slice; a page past the end is empty.

    Raises:
        ValidationError: page < 1 or per_page < 1
    """
    if page < 1:
        raise ValidationError(f"Page must be at least 1, got {page}")
    if per_page < 1:
        raise ValidationError(f"Page size must be at least 1, got {per_page}")
    start = (page - 1) * per_page
    return list(items[start:start + per_page])


def export_usage_reports(reports: Iterable[WalletUsageReport]) -> str:
    """privateKey,address,nonce,fileName per used wallet."""
    return "\n".join(
        format_usage_line(r.wallet, r.max_nonce, r.file_name)
        for r in reports
        if r.is_used
    )
