__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .loader import (
    CATALOG_FORMATS,
    ConfigError,
    LuaudocConfig,
    load_config_from_path,
    load_module_id_overrides,
)

__all__ = [
    "CATALOG_FORMATS",
    "ConfigError",
    "LuaudocConfig",
    "load_config_from_path",
    "load_module_id_overrides",
]
