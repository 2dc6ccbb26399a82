import json
from pathlib import Path
from typing import Any, Dict, Protocol

import yaml


class FileHandler(Protocol):
    """Parses one message catalog format into a flat {key: template} mapping."""

    def match(self, path: Path) -> bool: ...

    def load(self, path: Path) -> Dict[str, Any]: ...


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    # Nested sections address the same keys as dotted names.
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


class JsonHandler:
    def match(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            content = json.load(f)
        return _flatten(content) if isinstance(content, dict) else {}


class YamlHandler:
    """Handler for YAML catalogs, convenient for project-level overrides."""

    def match(self, path: Path) -> bool:
        return path.suffix.lower() in (".yaml", ".yml")

    def load(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
        return _flatten(content) if isinstance(content, dict) else {}
