from typing import Any, Dict

from luaudoc.spec import Catalog, Module, Symbol


def symbol_to_dict(symbol: Symbol) -> Dict[str, Any]:
    return {
        "kind": symbol.kind.value,
        "name": symbol.name,
        "qualifiedName": symbol.qualified_name,
        "location": {
            "file": symbol.file,
            "line": symbol.line,
            "column": symbol.column,
        },
        "docs": {
            "summary": symbol.summary,
            "descriptionMarkdown": symbol.description_markdown,
            "tags": [tag.to_dict() for tag in symbol.tags],
            "examples": [],
        },
        "types": {
            "display": symbol.types.display,
            "structured": symbol.types.to_structured(),
        },
        "visibility": symbol.visibility.value,
    }


def module_to_dict(module: Module) -> Dict[str, Any]:
    return {
        "id": module.id,
        "path": module.path,
        "sourceHash": module.source_hash,
        "symbols": [symbol_to_dict(symbol) for symbol in module.symbols],
    }


def catalog_to_dict(catalog: Catalog) -> Dict[str, Any]:
    return {
        "schemaVersion": catalog.schema_version,
        "generatorVersion": catalog.generator_version,
        "luauVersion": catalog.luau_version,
        "modules": [module_to_dict(module) for module in catalog.modules],
    }
