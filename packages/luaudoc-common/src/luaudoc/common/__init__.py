__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from pathlib import Path

from luaudoc.needle import needle
from .messaging.bus import MessageBus
from .adapters.yaml_adapter import YamlAdapter

# Packaged templates form the default layer; projects override them in
# .luaudoc/needle/<lang>/.
needle.add_root(Path(__file__).parent / "assets")

bus = MessageBus()

__all__ = ["bus", "MessageBus", "YamlAdapter"]
