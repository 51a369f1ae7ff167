"""Configuration loading."""

from tdsync.config.loader import DEFAULT_CONFIG_PATH, apply_env_overrides, load_config, write_config

__all__ = ["DEFAULT_CONFIG_PATH", "apply_env_overrides", "load_config", "write_config"]
