"""
Storage Layer.

This package handles reading the link list and the optional INI configuration
file.
"""

from .config_manager import ConfigManager
from .link_list import read_link_file

__all__ = ["ConfigManager", "read_link_file"]
