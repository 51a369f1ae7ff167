"""Pull, push and single-issue push commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from tdsync.cli.progress.rich import RichSyncProgress
from tdsync.contracts.config import TdSyncConfig
from tdsync.contracts.exceptions import ConfigError, SyncError
from tdsync.contracts.sync import SyncResult
from tdsync.engine.engine import SyncEngine

EngineCall = Callable[[SyncEngine], Awaitable[SyncResult]]


def _with_error_count(message: str, result: SyncResult) -> str:
    if result.errors:
        return f"{message} ({len(result.errors)} errors)"
    return message


def format_pull_summary(result: SyncResult, provider_name: str) -> str:
    return _with_error_count(f"Pulled {result.pulled} issue(s) from {provider_name}", result)


def format_push_summary(result: SyncResult, provider_name: str) -> str:
    return _with_error_count(f"Pushed {result.pushed} issue(s) to {provider_name}", result)


def format_push_one_summary(result: SyncResult, local_id: str, provider_name: str) -> str:
    if result.pushed == 0 and not result.errors:
        return f"{local_id} is already up to date on {provider_name}"
    return _with_error_count(f"Pushed {local_id} to {provider_name}", result)


def print_sync_errors(result: SyncResult) -> None:
    for error in result.errors:
        print(f"  - {error}", file=sys.stderr)


async def _run_engine(
    args: argparse.Namespace,
    config: TdSyncConfig,
    provider_id: str,
    call: EngineCall,
) -> tuple[SyncResult, str]:
    """Check the provider, then run *call* against a fresh engine under the sync timeout."""
    import tdsync.cli as cli

    work_dir = Path(args.work_dir).expanduser().resolve()
    async with cli.create_provider(provider_id, config) as provider:
        await provider.check_available(work_dir)

        local = cli.TdClient(work_dir, binary=config.td_binary)
        state_dir = config.resolve_state_dir(work_dir)
        try:
            async with asyncio.timeout(config.timeout_seconds):
                if args.verbose:
                    engine = cli.SyncEngine(provider, work_dir=work_dir, state_dir=state_dir, local=local)
                    result = await call(engine)
                else:
                    with RichSyncProgress() as progress:
                        engine = cli.SyncEngine(
                            provider, work_dir=work_dir, state_dir=state_dir, local=local, progress=progress
                        )
                        result = await call(engine)
        except TimeoutError as exc:
            raise SyncError(f"{provider.name} sync timed out after {config.timeout_seconds:g}s") from exc
        return result, provider.name


async def run_pull(args: argparse.Namespace) -> SyncResult:
    import tdsync.cli as cli

    config = cli.load_config(args.config)
    result, provider_name = await _run_engine(args, config, args.provider, lambda engine: engine.pull())

    print(cli._format_pull_summary(result, provider_name))
    if args.verbose:
        print_sync_errors(result)
    return result


async def run_push(args: argparse.Namespace) -> SyncResult:
    import tdsync.cli as cli

    config = cli.load_config(args.config)
    result, provider_name = await _run_engine(args, config, args.provider, lambda engine: engine.push())

    print(cli._format_push_summary(result, provider_name))
    if args.verbose:
        print_sync_errors(result)
    return result


async def run_push_one(args: argparse.Namespace) -> SyncResult:
    import tdsync.cli as cli

    config = cli.load_config(args.config)
    provider_id = args.provider
    if provider_id is None:
        work_dir = Path(args.work_dir).expanduser().resolve()
        provider_id = await cli.default_push_provider(config, work_dir)
        if provider_id is None:
            raise ConfigError("no provider configured: set up a GitHub remote or run 'tdsync setup-jira'")

    result, provider_name = await _run_engine(
        args, config, provider_id, lambda engine: engine.push_one(args.issue_id)
    )

    print(cli._format_push_one_summary(result, args.issue_id, provider_name))
    if args.verbose:
        print_sync_errors(result)
    return result


__all__ = [
    "format_pull_summary",
    "format_push_one_summary",
    "format_push_summary",
    "print_sync_errors",
    "run_pull",
    "run_push",
    "run_push_one",
]
