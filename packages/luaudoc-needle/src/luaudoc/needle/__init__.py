__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .pointer import L, SemanticPointer
from .runtime import needle, Needle
from .loader import Loader
from .handlers import FileHandler

__all__ = ["L", "SemanticPointer", "needle", "Needle", "Loader", "FileHandler"]
