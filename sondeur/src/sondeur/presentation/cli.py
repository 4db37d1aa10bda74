"""
Sondeur CLI.

Usage:
    sondeur check-balance WALLET_FILE... [--chain ETH --chain BNB]
    sondeur check-usage WALLET_FILE... [--chain ETH] [--rpc URL]
    sondeur match WALLET_FILE... [--targets-file PATH | --targets-url URL]
    sondeur compare FILE_1 FILE_2 [FILE_3 FILE_4]
    sondeur derive PRIVATE_KEY...
    sondeur rpc list|add|update|remove|reset
    sondeur files list|add|show|export|remove
"""

import asyncio
import functools
import json
import logging
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence

import click
from pydantic import ValidationError as PydanticValidationError

from shared.reporter import SystemReporter
from shared.reporter.emojis import (
    ErrorEmoji,
    NetworkEmoji,
    ScanEmoji,
    SystemEmoji,
)

from sondeur.application.services import CancellationToken
from sondeur.application.services.result_aggregator import (
    USAGE_FILTERS,
    balance_summary,
    export_balance_reports,
    export_usage_reports,
    filter_wallets_by_usage,
    page_count,
    paginate,
    sort_newest_first,
)
from sondeur.config.settings import STRATEGIES, load_config
from sondeur.di import DIContainer
from sondeur.domain.entities import Wallet, WalletFileRecord, WalletFileType
from sondeur.domain.exceptions import SondeurException, ValidationError
from sondeur.domain.value_objects import ProgressState
from sondeur.infrastructure.blockchain import BUILTIN_CHAINS
from sondeur.infrastructure.files import (
    default_export_name,
    fetch_targets,
    parse_wallet_files,
    read_targets,
    serialize_wallets,
    write_wallet_export,
)

REPORTER_KEY = "sondeur.reporter"


def _container(ctx: click.Context) -> DIContainer:
    return ctx.find_root().obj


def _reporter(ctx: click.Context) -> SystemReporter:
    return ctx.find_root().meta[REPORTER_KEY]


def handle_errors(func):
    """Turn domain errors into a message and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SondeurException as e:
            click.echo(ErrorEmoji.format("ERROR", e.message), err=True)
            sys.exit(1)
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except Exception as e:
            logging.getLogger(__name__).exception("Unexpected error")
            click.echo(
                ErrorEmoji.format("CRITICAL", f"Unexpected error: {e}"), err=True
            )
            sys.exit(1)

    return wrapper


def run_async(ctx: click.Context, coro_factory, cancel_token=None):
    """
    Run a coroutine, turning Ctrl-C into cooperative cancellation.

    The RPC client is closed inside the same event loop it was used in.
    """
    container = _container(ctx)
    reporter = _reporter(ctx)

    async def _main():
        loop = asyncio.get_running_loop()
        installed = False
        if cancel_token is not None:
            try:
                loop.add_signal_handler(
                    signal.SIGINT, cancel_token.cancel, "interrupted"
                )
                installed = True
            except (NotImplementedError, RuntimeError, ValueError):
                reporter.debug("Signal handlers unavailable", context="cli")
        try:
            return await coro_factory()
        finally:
            if installed:
                loop.remove_signal_handler(signal.SIGINT)
            await container.shutdown()

    return asyncio.run(_main())


def progress_printer(reporter: SystemReporter, context: str, step: float = 10.0):
    """Progress callback logging every `step` percent at verbose level 2."""
    state = {"next": step}

    def on_progress(progress: ProgressState) -> None:
        if progress.percentage >= state["next"] or progress.is_complete:
            reporter.info(
                ScanEmoji.format("PROGRESS", str(progress)),
                context=context,
                verbose_level=2,
            )
            while state["next"] <= progress.percentage:
                state["next"] += step

    return on_progress


def load_wallet_inputs(
    ctx: click.Context, paths: Sequence[str], use_stored: bool = False
) -> Dict[str, List[Wallet]]:
    """
    Parse wallet files (each failing independently) plus stored wallets.

    Raises:
        ValidationError: Nothing could be loaded
    """
    reporter = _reporter(ctx)
    parsed, errors = parse_wallet_files(paths)
    for name, error in errors.items():
        reporter.warning(
            ErrorEmoji.format("WARNING", error.message), context="files"
        )

    if use_stored:
        stored = _container(ctx).wallet_repository.load()
        if stored:
            parsed["<stored>"] = stored

    loaded = {name: wallets for name, wallets in parsed.items() if wallets}
    if not loaded:
        raise ValidationError("No wallets loaded")

    for name, wallets in loaded.items():
        reporter.info(
            ScanEmoji.format("WALLET", f"{name}: {len(wallets)} wallets"),
            context="files",
            verbose_level=2,
        )
    return loaded


def parse_rpc_overrides(values: Sequence[str]) -> Dict[str, str]:
    """CHAIN=URL pairs."""
    overrides = {}
    for value in values:
        chain, sep, url = value.partition("=")
        if not sep or not chain.strip() or not url.strip():
            raise ValidationError(f"Expected CHAIN=URL, got {value!r}")
        overrides[chain.strip().upper()] = url.strip()
    return overrides


def write_output(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@click.group()
@click.option("--config", "-c", default=None, help="Config file in config dir")
@click.option("--verbose", "-v", count=True, help="Increase verbosity")
@click.option("--quiet", "-q", is_flag=True, help="Errors only")
@click.option("--store", default=None, help="Override storage file path")
@click.pass_context
def cli(ctx, config, verbose, quiet, store):
    """Sondeur - EVM wallet balance and usage checker."""
    if ctx.obj is None:
        try:
            settings = load_config(config)
        except PydanticValidationError as e:
            click.echo(ErrorEmoji.format("ERROR", f"Invalid configuration: {e}"), err=True)
            sys.exit(1)
        if store:
            settings = settings.model_copy(update={"storage_path": store})
        ctx.obj = DIContainer(settings=settings)

    settings = ctx.obj.settings
    level = 0 if quiet else min(3, settings.verbose + verbose)
    reporter = SystemReporter(
        name="sondeur",
        log_dir=settings.log_dir,
        level=getattr(logging, settings.log_level.upper()),
        verbose=level,
        stream=sys.stderr,
    )
    ctx.meta[REPORTER_KEY] = reporter
    ctx.call_on_close(reporter.close)

    logging.basicConfig(
        level=logging.DEBUG if level >= 3 else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


# ----------------------------------------------------------------------
# Balance / usage runs
# ----------------------------------------------------------------------


@cli.command("check-balance")
@click.argument("wallet_files", nargs=-1, type=click.Path(dir_okay=False))
@click.option(
    "--chain", "-C", "chains", multiple=True, default=("ETH",), show_default=True
)
@click.option("--rpc", "rpcs", multiple=True, help="Primary RPC as CHAIN=URL")
@click.option("--strategy", type=click.Choice(STRATEGIES), default=None)
@click.option("--workers", "-w", type=int, default=None)
@click.option("--batch-size", type=int, default=None)
@click.option("--stored", is_flag=True, help="Include stored wallets")
@click.option("--output", "-o", type=click.Path(), default=None)
@click.option("--save/--no-save", default=False, help="Keep funded wallets")
@click.option("--page", type=int, default=1)
@click.option("--per-page", type=int, default=20)
@click.pass_context
@handle_errors
def check_balance(
    ctx, wallet_files, chains, rpcs, strategy, workers, batch_size, stored,
    output, save, page, per_page,
):
    """Check native balances of wallets on one or more chains."""
    reporter = _reporter(ctx)
    container = _container(ctx)

    files = load_wallet_inputs(ctx, wallet_files, stored)
    wallets = [w for file_wallets in files.values() for w in file_wallets]
    overrides = parse_rpc_overrides(rpcs)
    use_case = container.get_check_balances(worker_count=workers, batch_size=batch_size)
    token = CancellationToken()

    reporter.info(
        SystemEmoji.format(
            "STARTUP",
            f"Checking {len(wallets)} wallets on {', '.join(c.upper() for c in chains)}",
        ),
        context="check-balance",
    )

    outcome = run_async(
        ctx,
        lambda: use_case.execute(
            wallets,
            list(chains),
            primary_urls=overrides,
            strategy=strategy,
            cancel_token=token,
            on_progress=progress_printer(reporter, "check-balance"),
        ),
        cancel_token=token,
    )

    if outcome.cancelled:
        reporter.warning(
            SystemEmoji.format("CANCEL", f"Cancelled at {outcome.run.progress}"),
            context="check-balance",
        )
    if outcome.indeterminate_count:
        reporter.warning(
            ErrorEmoji.format(
                "INDETERMINATE",
                f"{outcome.indeterminate_count} queries failed on every endpoint",
            ),
            context="check-balance",
        )

    funded = sort_newest_first(outcome.funded)
    decimals = {chain.id: chain.decimals for chain in outcome.chains}
    for report in paginate(funded, page, per_page):
        amounts = ", ".join(
            f"{chain}: {balance_summary(result, decimals.get(chain, 18), False)}"
            for chain, result in report.nonzero_balances.items()
        )
        click.echo(ScanEmoji.format("BALANCE", f"{report.wallet.address} {amounts}"))

    click.echo(
        f"{len(funded)}/{len(outcome.reports)} wallets with balance "
        f"(page {page}/{page_count(len(funded), per_page)})"
    )

    if funded:
        path = Path(
            output
            or default_export_name("balance_results", now=datetime.now())
        )
        write_output(path, export_balance_reports(funded, decimals))
        reporter.info(ScanEmoji.format("EXPORT", f"Wrote {path}"), context="export")

        if save:
            container.wallet_file_repository.add(
                WalletFileRecord(
                    name=path.name,
                    wallets=[r.wallet for r in funded],
                    type=WalletFileType.CHECKED,
                )
            )


@cli.command("check-usage")
@click.argument("wallet_files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("--chain", "-C", default="ETH", show_default=True)
@click.option("--rpc", default=None, help="Custom RPC URL for this run")
@click.option("--workers", "-w", type=int, default=None)
@click.option("--batch-size", type=int, default=None)
@click.option("--include-balance", is_flag=True, help="Balance counts as usage")
@click.option(
    "--filter", "filter_type", type=click.Choice(USAGE_FILTERS), default="used",
    show_default=True,
)
@click.option("--stored", is_flag=True, help="Include stored wallets")
@click.option("--output", "-o", type=click.Path(), default=None)
@click.pass_context
@handle_errors
def check_usage(
    ctx, wallet_files, chain, rpc, workers, batch_size, include_balance,
    filter_type, stored, output,
):
    """Find wallets that have been used (nonce > 0) on a chain."""
    reporter = _reporter(ctx)
    container = _container(ctx)

    files = load_wallet_inputs(ctx, wallet_files, stored)
    use_case = container.get_check_usage(worker_count=workers, batch_size=batch_size)
    token = CancellationToken()

    outcome = run_async(
        ctx,
        lambda: use_case.execute(
            files,
            chain,
            primary_url=rpc,
            include_balance=include_balance,
            cancel_token=token,
            on_progress=progress_printer(reporter, "check-usage"),
        ),
        cancel_token=token,
    )

    if outcome.cancelled:
        reporter.warning(
            SystemEmoji.format("CANCEL", f"Cancelled at {outcome.run.progress}"),
            context="check-usage",
        )

    stats = outcome.statistics
    click.echo(
        f"total={stats.total} used={stats.used} ({stats.used_percentage:.1f}%) "
        f"unused={stats.unused} with_balance={stats.with_balance} "
        f"with_transactions={stats.with_transactions} "
        f"indeterminate={stats.indeterminate}"
    )

    statuses = [next(iter(r.statuses.values()), None) for r in outcome.reports]
    selected = filter_wallets_by_usage(
        [r.wallet for r in outcome.reports], statuses, filter_type
    )
    selected_addresses = {w.normalized_address for w in selected}
    selected_reports = [
        r for r in outcome.reports if r.wallet.normalized_address in selected_addresses
    ]
    for report in selected_reports:
        click.echo(
            ScanEmoji.format(
                "USED" if report.is_used else "EMPTY",
                f"{report.wallet.address} nonce={report.max_nonce} ({report.file_name})",
            )
        )

    used = outcome.used
    if used:
        path = Path(output or default_export_name("used_wallets", now=datetime.now()))
        write_output(path, export_usage_reports(used))
        reporter.info(ScanEmoji.format("EXPORT", f"Wrote {path}"), context="export")


# ----------------------------------------------------------------------
# Matching / comparison / derivation
# ----------------------------------------------------------------------


@cli.command()
@click.argument("wallet_files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("--targets-file", default=None, type=click.Path(dir_okay=False))
@click.option("--targets-url", default=None)
@click.option("--stored", is_flag=True, help="Include stored wallets")
@click.option("--save/--no-save", default=True, help="Keep matches as a file")
@click.option("--output", "-o", type=click.Path(), default=None)
@click.pass_context
@handle_errors
def match(ctx, wallet_files, targets_file, targets_url, stored, save, output):
    """Match wallet addresses against a target address list."""
    reporter = _reporter(ctx)
    container = _container(ctx)
    settings = container.settings

    targets_file = targets_file or (None if targets_url else settings.targets_file)
    targets_url = targets_url or settings.targets_url
    if targets_file:
        targets = read_targets(targets_file)
    elif targets_url:
        reporter.info(
            NetworkEmoji.format("DOWNLOAD", f"Fetching targets from {targets_url}"),
            context="match",
        )
        targets = run_async(
            ctx,
            lambda: fetch_targets(
                targets_url,
                timeout=settings.rpc.request_timeout,
                retry_config=settings.retry.to_retry_config(),
            ),
        )
    else:
        raise ValidationError("Provide --targets-file or --targets-url")

    if not targets:
        raise ValidationError("Target list is empty")

    files = load_wallet_inputs(ctx, wallet_files, stored)
    wallets = [w for file_wallets in files.values() for w in file_wallets]
    matched = container.get_match_targets().execute(wallets, targets, save=save)

    for wallet in matched:
        click.echo(ScanEmoji.format("MATCH", wallet.address))
    click.echo(f"{len(matched)}/{len(wallets)} wallets matched {len(targets)} targets")

    if matched and output:
        write_output(Path(output), serialize_wallets(matched))
        reporter.info(ScanEmoji.format("EXPORT", f"Wrote {output}"), context="export")


@cli.command()
@click.argument("wallet_files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("--output", "-o", type=click.Path(), default=None)
@click.pass_context
@handle_errors
def compare(ctx, wallet_files, output):
    """List wallets present in every given file (2 to 4 files)."""
    parsed, errors = parse_wallet_files(wallet_files)
    for error in errors.values():
        _reporter(ctx).warning(error.message, context="compare")

    results = _container(ctx).get_compare_wallet_files().execute(parsed)
    for result in results:
        click.echo(
            ScanEmoji.format(
                "COMPARE",
                f"{result.wallet.address} in {', '.join(result.found_in_files)}",
            )
        )
    click.echo(f"{len(results)} wallets found in all files")

    if results and output:
        write_output(Path(output), serialize_wallets(r.wallet for r in results))


@cli.command()
@click.argument("private_keys", nargs=-1)
@click.option(
    "--keys-file", type=click.Path(exists=True, dir_okay=False), default=None,
    help="File with one private key per line",
)
@click.option("--save", is_flag=True, help="Add derived wallets to the store")
@click.pass_context
@handle_errors
def derive(ctx, private_keys, keys_file, save):
    """Derive addresses from private keys."""
    keys = list(private_keys)
    if keys_file:
        lines = Path(keys_file).read_text(encoding="utf-8").splitlines()
        keys.extend(line.strip() for line in lines if line.strip())
    if not keys:
        raise ValidationError("Provide at least one private key")

    wallets = _container(ctx).get_derive_wallets().execute(keys, save=save)
    click.echo(serialize_wallets(wallets))


# ----------------------------------------------------------------------
# RPC management
# ----------------------------------------------------------------------


@cli.group()
def rpc():
    """Custom RPC endpoint management."""


@rpc.command("list")
@click.option("--chain", default=None)
@click.option("--builtin", is_flag=True, help="Also show built-in endpoints")
@click.pass_context
@handle_errors
def rpc_list(ctx, chain, builtin):
    """List custom RPC endpoints."""
    registry = _container(ctx).chain_registry
    configs = registry.list_rpcs(chain)
    for config in configs:
        label = f" ({config.name})" if config.name else ""
        click.echo(f"{config.id}  {config.chain:<8} {config.url}{label}")
    if not configs:
        click.echo("No custom RPC endpoints")

    if builtin:
        chain_ids = [chain.upper()] if chain else registry.known_chains()
        for chain_id in chain_ids:
            resolved = registry.get_chain(chain_id)
            click.echo(
                NetworkEmoji.format(
                    "RPC", f"{resolved.id} [{resolved.symbol}]: {len(resolved.endpoints)} endpoints"
                )
            )
            for endpoint in resolved.endpoints:
                click.echo(f"    {endpoint}")


@rpc.command("add")
@click.argument("chain")
@click.argument("url")
@click.option("--name", default=None)
@click.pass_context
@handle_errors
def rpc_add(ctx, chain, url, name):
    """Add a custom RPC endpoint for CHAIN."""
    config = _container(ctx).chain_registry.add_rpc(chain, url, name)
    if config.chain not in BUILTIN_CHAINS:
        _reporter(ctx).warning(
            f"{config.chain} is not a built-in chain; symbol will be TOKEN",
            context="rpc",
        )
    click.echo(SystemEmoji.format("SAVE", f"Added {config.id} for {config.chain}"))


@rpc.command("update")
@click.argument("config_id")
@click.option("--url", default=None)
@click.option("--name", default=None)
@click.pass_context
@handle_errors
def rpc_update(ctx, config_id, url, name):
    """Change the URL or name of a custom endpoint."""
    config = _container(ctx).chain_registry.update_rpc(config_id, url=url, name=name)
    click.echo(SystemEmoji.format("SAVE", f"Updated {config.id}: {config.url}"))


@rpc.command("remove")
@click.argument("config_id")
@click.pass_context
@handle_errors
def rpc_remove(ctx, config_id):
    """Remove a custom RPC endpoint."""
    config = _container(ctx).chain_registry.remove_rpc(config_id)
    click.echo(SystemEmoji.format("DELETE", f"Removed {config.id} ({config.chain})"))


@rpc.command("reset")
@click.confirmation_option(prompt="Remove all custom RPC endpoints?")
@click.pass_context
@handle_errors
def rpc_reset(ctx):
    """Remove all custom RPC endpoints."""
    _container(ctx).chain_registry.reset_rpcs()
    click.echo(SystemEmoji.format("DELETE", "Custom RPC endpoints cleared"))


# ----------------------------------------------------------------------
# Stored wallet files
# ----------------------------------------------------------------------


@cli.group()
def files():
    """Stored wallet file management."""


@files.command("list")
@click.option(
    "--type", "file_type",
    type=click.Choice([t.value for t in WalletFileType]), default=None,
)
@click.option("--search", default="")
@click.option("--page", type=int, default=1)
@click.option("--per-page", type=int, default=20)
@click.pass_context
@handle_errors
def files_list(ctx, file_type, search, page, per_page):
    """List stored wallet files, newest first."""
    records = _container(ctx).wallet_file_repository.list(
        WalletFileType(file_type) if file_type else None, search
    )
    for record in paginate(records, page, per_page):
        click.echo(
            f"{record.id}  {record.type.value:<9} {len(record.wallets):>7}  "
            f"{record.created_at:%Y-%m-%d %H:%M}  {record.name}"
        )
    click.echo(f"{len(records)} files (page {page}/{page_count(len(records), per_page)})")


@files.command("add")
@click.argument("wallet_files", nargs=-1, type=click.Path(dir_okay=False))
@click.pass_context
@handle_errors
def files_add(ctx, wallet_files):
    """Store wallet files for later runs."""
    repository = _container(ctx).wallet_file_repository
    for name, wallets in load_wallet_inputs(ctx, wallet_files).items():
        record = repository.add(WalletFileRecord(name=name, wallets=wallets))
        click.echo(SystemEmoji.format("SAVE", f"{record.id}  {name} ({len(wallets)})"))


@files.command("show")
@click.argument("record_id")
@click.option("--json", "as_json", is_flag=True)
@click.pass_context
@handle_errors
def files_show(ctx, record_id, as_json):
    """Print a stored wallet file."""
    record = _container(ctx).wallet_file_repository.get(record_id)
    if as_json:
        click.echo(json.dumps(record.to_dict(), indent=2))
    else:
        click.echo(serialize_wallets(record.wallets))


@files.command("export")
@click.argument("record_id")
@click.option("--output-dir", "-d", type=click.Path(file_okay=False), default=".")
@click.pass_context
@handle_errors
def files_export(ctx, record_id, output_dir):
    """Write a stored wallet file to disk (large lists are split in parts)."""
    container = _container(ctx)
    record = container.wallet_file_repository.get(record_id)
    export = container.settings.export
    paths = write_wallet_export(
        record.wallets,
        output_dir,
        base_name=record.name,
        chunk_threshold=export.chunk_threshold,
        chunk_size=export.chunk_size,
    )
    for path in paths:
        click.echo(ScanEmoji.format("EXPORT", str(path)))


@files.command("remove")
@click.argument("record_id")
@click.pass_context
@handle_errors
def files_remove(ctx, record_id):
    """Delete a stored wallet file."""
    record = _container(ctx).wallet_file_repository.remove(record_id)
    click.echo(SystemEmoji.format("DELETE", f"Removed {record.name}"))


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
