"""Progress renderers for the CLI."""

from tdsync.cli.progress.rich import RichSyncProgress

__all__ = ["RichSyncProgress"]
