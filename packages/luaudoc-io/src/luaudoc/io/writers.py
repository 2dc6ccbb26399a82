import json
from pathlib import Path

import yaml

from luaudoc.spec import Catalog, CatalogWriterProtocol

from .catalog import catalog_to_dict


class _FileCatalogWriter(CatalogWriterProtocol):
    def write(self, catalog: Catalog, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dumps(catalog), encoding="utf-8")


class JsonCatalogWriter(_FileCatalogWriter):
    def __init__(self, indent: int = 2):
        self.indent = indent

    @property
    def format_name(self) -> str:
        return "json"

    def dumps(self, catalog: Catalog) -> str:
        return json.dumps(catalog_to_dict(catalog), indent=self.indent, ensure_ascii=False) + "\n"


class YamlCatalogWriter(_FileCatalogWriter):
    @property
    def format_name(self) -> str:
        return "yaml"

    def dumps(self, catalog: Catalog) -> str:
        return yaml.safe_dump(
            catalog_to_dict(catalog),
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )


_WRITERS = {
    "json": JsonCatalogWriter,
    "yaml": YamlCatalogWriter,
}


def make_writer(format_name: str) -> CatalogWriterProtocol:
    try:
        return _WRITERS[format_name]()
    except KeyError:
        raise ValueError(f"Unknown catalog format: {format_name}") from None
