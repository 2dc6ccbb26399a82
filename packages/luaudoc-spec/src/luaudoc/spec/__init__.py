# This must be the very first line to allow this package to coexist with other
# namespace packages in editable installs.
__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .models import (
    MEMBER_KINDS,
    Binding,
    Catalog,
    ClassTag,
    ClassTypes,
    ConstructorTag,
    Deprecation,
    Diagnostic,
    DiagnosticLevel,
    DocBlock,
    DocState,
    ErrorInfo,
    FieldInfo,
    FieldTypes,
    FunctionTag,
    FunctionTypes,
    GenerationResult,
    InterfaceTag,
    InterfaceTypes,
    Module,
    ParamInfo,
    ParsedDoc,
    PropertyTag,
    PropertyTypes,
    RenderedType,
    ReturnInfo,
    Symbol,
    SymbolKind,
    SymbolTypes,
    TagValue,
    TypeAliasTag,
    TypeAliasTypes,
    TypeTag,
    Visibility,
    tag_is_method,
    tag_type_text,
)
from .protocols import (
    BindingSourceProtocol,
    CatalogWriterProtocol,
    DocumentAdapter,
    TypeOracleProtocol,
)

__all__ = [
    "BindingSourceProtocol",
    "CatalogWriterProtocol",
    "DocumentAdapter",
    "TypeOracleProtocol",
    "MEMBER_KINDS",
    "Binding",
    "Catalog",
    "ClassTag",
    "ClassTypes",
    "ConstructorTag",
    "Deprecation",
    "Diagnostic",
    "DiagnosticLevel",
    "DocBlock",
    "DocState",
    "ErrorInfo",
    "FieldInfo",
    "FieldTypes",
    "FunctionTag",
    "FunctionTypes",
    "GenerationResult",
    "InterfaceTag",
    "InterfaceTypes",
    "Module",
    "ParamInfo",
    "ParsedDoc",
    "PropertyTag",
    "PropertyTypes",
    "RenderedType",
    "ReturnInfo",
    "Symbol",
    "SymbolKind",
    "SymbolTypes",
    "TagValue",
    "TypeAliasTag",
    "TypeAliasTypes",
    "TypeTag",
    "Visibility",
    "tag_is_method",
    "tag_type_text",
]
