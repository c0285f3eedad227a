"""Configuration loading."""

from boardmirror.config.loader import load_config

__all__ = ["load_config"]
