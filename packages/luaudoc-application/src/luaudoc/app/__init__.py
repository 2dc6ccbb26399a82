__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .core import DocgenApp, SourceFile, collect_source_files

__all__ = ["DocgenApp", "SourceFile", "collect_source_files"]
