"""Per-provider sync state storage."""

from tdsync.state.store import load_state, save_state, state_filename

__all__ = ["load_state", "save_state", "state_filename"]
