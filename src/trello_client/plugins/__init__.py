"""Request observers for Trello client."""

from .plugin import NullObserver, PluginPriority, RequestObserver
from .logging_plugin import LoggingPlugin
from .monitoring_plugin import MonitoringPlugin

__all__ = [
    "RequestObserver",
    "NullObserver",
    "PluginPriority",
    "LoggingPlugin",
    "MonitoringPlugin",
]
