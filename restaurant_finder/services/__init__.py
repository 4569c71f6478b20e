"""
Services for the Restaurant Finder system.
"""

from .config_manager import ConfigurationManager

__all__ = ["ConfigurationManager"]
