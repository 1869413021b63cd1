"""Configuration loading."""

from command_run.lib.config.settings import AnnounceConfig, load_config

__all__ = ["AnnounceConfig", "load_config"]
