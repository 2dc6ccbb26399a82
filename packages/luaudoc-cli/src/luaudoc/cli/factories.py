import dataclasses
from pathlib import Path
from typing import Any, Optional

import typer

from luaudoc.app import DocgenApp
from luaudoc.common import bus
from luaudoc.config import ConfigError, LuaudocConfig, load_config_from_path
from luaudoc.needle import L, needle


def get_project_root(root: Optional[Path] = None) -> Path:
    return (root or Path.cwd()).resolve()


def make_config(root_path: Path, **overrides: Any) -> LuaudocConfig:
    """Loads project config and layers the explicitly given CLI options on top."""
    try:
        config = load_config_from_path(root_path)
        given = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(config, **given).validate()
    except ConfigError as e:
        bus.error(L.error.config.invalid, error=e)
        raise typer.Exit(code=1)


def make_app(root: Optional[Path] = None, **overrides: Any) -> DocgenApp:
    root_path = get_project_root(root)
    # Project message overrides live under the chosen root, not the cwd.
    needle.set_project_root(root_path)
    return DocgenApp(root_path=root_path, config=make_config(root_path, **overrides))
