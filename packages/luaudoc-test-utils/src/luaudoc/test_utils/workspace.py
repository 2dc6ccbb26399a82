import json
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List

import tomli_w
import yaml


class WorkspaceFactory:
    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files_to_create: List[Dict[str, Any]] = []
        self._pyproject_data: Dict[str, Any] = {}

    def with_config(self, luaudoc_config: Dict[str, Any]) -> "WorkspaceFactory":
        tool = self._pyproject_data.setdefault("tool", {})
        tool["luaudoc"] = luaudoc_config
        return self

    def with_source(
        self, path: str, content: str, newline: str = "\n"
    ) -> "WorkspaceFactory":
        # Line numbers in assertions count from the first non-empty line.
        text = dedent(content).lstrip("\n").replace("\n", newline)
        self._files_to_create.append({"path": path, "content": text, "format": "raw"})
        return self

    def with_types(self, path: str, data: Dict[str, Any]) -> "WorkspaceFactory":
        self._files_to_create.append({"path": path, "content": data, "format": "yaml"})
        return self

    def with_docs_config(self, data: Dict[str, Any]) -> "WorkspaceFactory":
        self._files_to_create.append(
            {"path": "docs.config.json", "content": data, "format": "json"}
        )
        return self

    def build(self) -> Path:
        if self._pyproject_data:
            self._files_to_create.append(
                {
                    "path": "pyproject.toml",
                    "content": self._pyproject_data,
                    "format": "toml",
                }
            )

        for file_spec in self._files_to_create:
            output_path = self.root_path / file_spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)

            content = file_spec["content"]
            fmt = file_spec["format"]

            if fmt == "toml":
                with output_path.open("wb") as f:
                    tomli_w.dump(content, f)
            elif fmt == "yaml":
                output_path.write_text(yaml.dump(content, indent=2), encoding="utf-8")
            elif fmt == "json":
                output_path.write_text(json.dumps(content, indent=2), encoding="utf-8")
            else:
                # Line endings are written exactly as given.
                output_path.write_bytes(content.encode("utf-8"))

        return self.root_path
