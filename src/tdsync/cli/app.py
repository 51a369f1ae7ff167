"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from tdsync.contracts.exceptions import (
    ConfigError,
    LocalTrackerError,
    ProviderError,
    SyncError,
    SyncStateError,
)


def main(argv: list[str] | None = None) -> int:
    import tdsync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    if args.command == "setup-jira":
        return cli._run_setup_jira(args)

    try:
        if args.command == "providers":
            cli.asyncio.run(cli._run_providers(args))
        elif args.command == "pull":
            cli.asyncio.run(cli._run_pull(args))
        elif args.command == "push":
            cli.asyncio.run(cli._run_push(args))
        elif args.command == "push-one":
            cli.asyncio.run(cli._run_push_one(args))
        return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (ProviderError, LocalTrackerError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except (SyncError, SyncStateError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
