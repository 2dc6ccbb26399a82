import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

log = logging.getLogger(__name__)

CATALOG_FORMATS = ("json", "yaml")
DOCS_CONFIG_NAME = "docs.config.json"


class ConfigError(ValueError):
    pass


@dataclass
class LuaudocConfig:
    src_dir: str = "src"
    types_dir: Optional[str] = None
    out: str = "reference.json"
    format: str = "json"
    types_file: Optional[str] = None
    fail_on_warning: bool = False
    generator_version: str = "0.0.0"
    jobs: int = 1
    # root-relative source path -> module id
    module_id_overrides: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> "LuaudocConfig":
        if self.format not in CATALOG_FORMATS:
            raise ConfigError(
                f"format must be one of {', '.join(CATALOG_FORMATS)}, got '{self.format}'"
            )
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")
        return self


def _normalize_overrides(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(k).replace("\\", "/"): str(v) for k, v in raw.items()}


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def load_module_id_overrides(root: Path) -> Dict[str, str]:
    """Reads `moduleIdOverrides` from docs.config.json at the project root."""
    config_path = root / DOCS_CONFIG_NAME
    if not config_path.is_file():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning(f"Ignoring unreadable {config_path}: {e}")
        return {}
    if not isinstance(data, dict):
        return {}
    return _normalize_overrides(data.get("moduleIdOverrides"))


def load_config_from_path(search_path: Path) -> LuaudocConfig:
    overrides = load_module_id_overrides(search_path)

    try:
        config_path = _find_pyproject_toml(search_path)
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return LuaudocConfig(module_id_overrides=overrides)
    except tomllib.TOMLDecodeError as e:
        log.warning(f"Ignoring malformed pyproject.toml: {e}")
        return LuaudocConfig(module_id_overrides=overrides)

    tool_data: Dict[str, Any] = data.get("tool", {}).get("luaudoc", {})

    # pyproject entries win over docs.config.json for the same path.
    overrides.update(_normalize_overrides(tool_data.get("module_id_overrides")))

    defaults = LuaudocConfig()
    config = LuaudocConfig(
        src_dir=tool_data.get("src_dir", defaults.src_dir),
        types_dir=tool_data.get("types_dir", defaults.types_dir),
        out=tool_data.get("out", defaults.out),
        format=tool_data.get("format", defaults.format),
        types_file=tool_data.get("types_file", defaults.types_file),
        fail_on_warning=bool(tool_data.get("fail_on_warning", defaults.fail_on_warning)),
        generator_version=str(
            tool_data.get("generator_version", defaults.generator_version)
        ),
        jobs=int(tool_data.get("jobs", defaults.jobs)),
        module_id_overrides=overrides,
    )
    return config.validate()
