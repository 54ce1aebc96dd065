"""
Rolegate - Role assignment policy service.

Wires the rolegate_core policy engine to configuration, in-memory
directory adapters and audit sinks.
"""

__version__ = "0.1.0"

from rolegate.config import ConfigError, RolegateConfig, get_config
from rolegate.service import RolegateServices, build_services, configure_logging

__all__ = [
    "__version__",
    "get_config",
    "RolegateConfig",
    "ConfigError",
    "build_services",
    "configure_logging",
    "RolegateServices",
]
