__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .catalog import catalog_to_dict, symbol_to_dict
from .writers import JsonCatalogWriter, YamlCatalogWriter, make_writer

__all__ = [
    "JsonCatalogWriter",
    "YamlCatalogWriter",
    "catalog_to_dict",
    "make_writer",
    "symbol_to_dict",
]
