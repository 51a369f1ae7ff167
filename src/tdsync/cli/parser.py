"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

PROVIDER_CHOICES = ("github", "jira")


def _package_version() -> str:
    try:
        return version("tdsync")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="Path to config.json (default: ~/.config/tdsync/config.json)")
    parser.add_argument("--work-dir", default=".", help="Project directory holding the td database (default: .)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging and list sync errors")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tdsync", description="Sync td issues with GitHub Issues and Jira Cloud")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    providers_parser = subparsers.add_parser("providers", help="List configured providers and their availability")
    _add_common_options(providers_parser)

    pull_parser = subparsers.add_parser("pull", help="Create or update td issues from the remote tracker")
    pull_parser.add_argument("--provider", required=True, choices=PROVIDER_CHOICES, help="Remote tracker")
    _add_common_options(pull_parser)

    push_parser = subparsers.add_parser("push", help="Create or update remote issues from td")
    push_parser.add_argument("--provider", required=True, choices=PROVIDER_CHOICES, help="Remote tracker")
    _add_common_options(push_parser)

    push_one_parser = subparsers.add_parser("push-one", help="Push a single td issue")
    push_one_parser.add_argument("issue_id", help="td issue ID (e.g. td-a1b2c3)")
    push_one_parser.add_argument(
        "--provider",
        default=None,
        choices=PROVIDER_CHOICES,
        help="Remote tracker (default: first configured provider)",
    )
    _add_common_options(push_one_parser)

    setup_parser = subparsers.add_parser("setup-jira", help="Configure the Jira Cloud integration interactively")
    _add_common_options(setup_parser)

    return parser


__all__ = ["PROVIDER_CHOICES", "build_parser"]
