"""Utility modules for streamscout."""

from streamscout.utils.config import get_config_file, read_config_file, set_config_value

__all__ = [
    "get_config_file",
    "read_config_file",
    "set_config_value",
]
