"""Command-line interface for tdsync."""

from __future__ import annotations

import asyncio
import logging as logging

from tdsync.cli.app import main as main
from tdsync.cli.commands import providers as providers_command
from tdsync.cli.commands import setup as setup_command
from tdsync.cli.commands import sync as sync_command
from tdsync.cli.parser import build_parser as build_parser
from tdsync.config import load_config as load_config
from tdsync.config import write_config as write_config
from tdsync.contracts.exceptions import ConfigError as ConfigError
from tdsync.engine.engine import SyncEngine as SyncEngine
from tdsync.local.td import TdClient as TdClient
from tdsync.providers import create_provider as create_provider
from tdsync.providers import default_push_provider as default_push_provider
from tdsync.providers import registered_providers as registered_providers

__all__ = ["asyncio", "build_parser", "main"]

_format_pull_summary = sync_command.format_pull_summary
_format_push_summary = sync_command.format_push_summary
_format_push_one_summary = sync_command.format_push_one_summary

_run_pull = sync_command.run_pull
_run_push = sync_command.run_push
_run_push_one = sync_command.run_push_one
_run_providers = providers_command.run_providers
_run_setup_jira = setup_command.run_setup_jira


if __name__ == "__main__":
    raise SystemExit(main())
