"""Local ``td`` tracker access."""

from tdsync.local.td import TdClient, parse_created_id

__all__ = ["TdClient", "parse_created_id"]
