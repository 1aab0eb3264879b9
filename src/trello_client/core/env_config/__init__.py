"""
Environment configuration for Trello client.

Example:
    >>> from trello_client.core.env_config import load_from_env
    >>>
    >>> # TRELLO_API_KEY / TRELLO_TOKEN from the environment
    >>> config = load_from_env()
    >>>
    >>> # From a .env file with overrides
    >>> config = load_from_env(env_file=".env", retries=5)
"""

from .loader import load_from_env, print_config_summary
from .validator import TrelloSettings, load_settings

__all__ = [
    "load_from_env",
    "print_config_summary",
    "TrelloSettings",
    "load_settings",
]
