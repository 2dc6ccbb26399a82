from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class SymbolKind(str, Enum):
    CLASS = "class"
    PROPERTY = "property"
    TYPE = "type"
    INTERFACE = "interface"
    FUNCTION = "function"
    CONSTRUCTOR = "constructor"
    FIELD = "field"


# Kinds that only make sense as members of a class.
MEMBER_KINDS = (SymbolKind.FUNCTION, SymbolKind.PROPERTY, SymbolKind.CONSTRUCTOR)


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    IGNORED = "ignored"


class DiagnosticLevel(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Diagnostic:
    level: DiagnosticLevel
    file: str
    line: int
    message: str


# --- Raw comment layer ---


@dataclass(frozen=True)
class DocBlock:
    start_line: int
    end_line: int
    content_lines: Tuple[str, ...] = ()


@dataclass
class ParamInfo:
    name: str
    type: str = ""
    description: List[str] = field(default_factory=list)


@dataclass
class ReturnInfo:
    type: str = ""
    description: List[str] = field(default_factory=list)


@dataclass
class ErrorInfo:
    type: str = ""
    description: List[str] = field(default_factory=list)


@dataclass
class FieldInfo:
    name: str
    type: str = ""
    description: str = ""
    line: int = 0
    column: int = 1


# --- Type tags: one variant per declared kind ---


@dataclass
class ClassTag:
    name: str

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.CLASS


@dataclass
class PropertyTag:
    name: str
    type: str = ""
    description: List[str] = field(default_factory=list)

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.PROPERTY


@dataclass
class TypeAliasTag:
    name: str
    type: str = ""
    description: List[str] = field(default_factory=list)

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.TYPE


@dataclass
class InterfaceTag:
    name: str

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.INTERFACE


@dataclass
class FunctionTag:
    name: str
    is_method: bool = False

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.FUNCTION


@dataclass
class ConstructorTag:
    name: str

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.CONSTRUCTOR


TypeTag = Union[
    ClassTag, PropertyTag, TypeAliasTag, InterfaceTag, FunctionTag, ConstructorTag
]


def tag_is_method(tag: TypeTag) -> bool:
    return isinstance(tag, FunctionTag) and tag.is_method


def tag_type_text(tag: TypeTag) -> str:
    if isinstance(tag, (PropertyTag, TypeAliasTag)):
        return tag.type
    return ""


@dataclass
class Deprecation:
    version: str
    description: str = ""


@dataclass
class DocState:
    within: str = ""
    yields: bool = False
    readonly: bool = False
    visibility: Optional[Visibility] = None
    since: str = ""
    unreleased: bool = False
    event: bool = False
    inherit_doc: str = ""
    index_name: str = ""
    deprecated: Optional[Deprecation] = None
    extends: List[str] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    snippets: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    realms: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)


@dataclass
class ParsedDoc:
    description_lines: List[str] = field(default_factory=list)
    type_tags: List[TypeTag] = field(default_factory=list)
    fields: List[FieldInfo] = field(default_factory=list)
    params: List[ParamInfo] = field(default_factory=list)
    returns: List[ReturnInfo] = field(default_factory=list)
    errors: List[ErrorInfo] = field(default_factory=list)
    externals: List[Tuple[str, str]] = field(default_factory=list)
    state: DocState = field(default_factory=DocState)

    @property
    def primary_tag(self) -> Optional[TypeTag]:
        return self.type_tags[0] if self.type_tags else None


# --- Syntactic facts supplied by a binding source ---


@dataclass
class Binding:
    kind: SymbolKind
    name: str
    line: int
    within: str = ""
    is_method: bool = False
    params: List[ParamInfo] = field(default_factory=list)
    return_type: str = ""
    type_fields: List[FieldInfo] = field(default_factory=list)
    # Inclusive line span of an inline record body, (0, 0) when absent.
    type_table_span: Tuple[int, int] = (0, 0)

    @property
    def has_record_shape(self) -> bool:
        return self.type_table_span[0] > 0

    def spans_line(self, line: int) -> bool:
        start, end = self.type_table_span
        return start > 0 and start <= line <= end


@dataclass
class RenderedType:
    """
    A statically inferred type as reported by a type oracle.

    For function-shaped types `params` holds `(name, type)` pairs in declaration
    order (names may be empty) and `returns` the rendered return types.
    """

    display: str = ""
    params: List[Tuple[str, str]] = field(default_factory=list)
    returns: List[str] = field(default_factory=list)
    is_function: bool = False
    has_self: bool = False
    method_display: str = ""

    def as_method(self) -> "RenderedType":
        params = self.params
        if self.has_self and params:
            params = params[1:]
        return RenderedType(
            display=self.method_display or self.display,
            params=list(params),
            returns=list(self.returns),
            is_function=self.is_function,
            has_self=False,
        )

    def param_type_for(self, name: str) -> str:
        for param_name, type_text in self.params:
            if param_name and param_name == name:
                return type_text
        return ""


# --- Resolved output ---


def _optional(value: str) -> Optional[str]:
    return value or None


def _joined(lines: List[str]) -> Optional[str]:
    text = "\n".join(line.strip() for line in lines).strip()
    return text or None


@dataclass
class TagValue:
    name: str
    value: Union[str, bool] = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "value": self.value}
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class FunctionTypes:
    display: str = ""
    params: List[ParamInfo] = field(default_factory=list)
    returns: List[ReturnInfo] = field(default_factory=list)
    errors: List[ErrorInfo] = field(default_factory=list)
    yields: bool = False

    def to_structured(self) -> Dict[str, Any]:
        return {
            "params": [
                {
                    "name": p.name,
                    "type": _optional(p.type),
                    "description": _joined(p.description),
                }
                for p in self.params
            ],
            "returns": [
                {"type": _optional(r.type), "description": _joined(r.description)}
                for r in self.returns
            ],
            "errors": [
                {"type": _optional(e.type), "description": _joined(e.description)}
                for e in self.errors
            ],
            "yields": self.yields,
        }


@dataclass
class PropertyTypes:
    display: str = ""
    type: str = ""
    readonly: bool = False

    def to_structured(self) -> Dict[str, Any]:
        return {"type": _optional(self.type), "readonly": self.readonly}


@dataclass
class InterfaceTypes:
    display: str = ""
    fields: List[FieldInfo] = field(default_factory=list)

    def to_structured(self) -> Dict[str, Any]:
        return {
            "fields": [
                {
                    "name": f.name,
                    "type": _optional(f.type),
                    "description": _optional(f.description),
                }
                for f in self.fields
            ]
        }


@dataclass
class TypeAliasTypes:
    display: str = ""
    type: str = ""

    def to_structured(self) -> Dict[str, Any]:
        return {"type": _optional(self.type)}


@dataclass
class ClassTypes:
    display: str = ""
    index_name: str = ""

    def to_structured(self) -> Dict[str, Any]:
        return {"indexName": _optional(self.index_name)}


@dataclass
class FieldTypes:
    display: str = ""
    type: str = ""

    def to_structured(self) -> Dict[str, Any]:
        return {"type": _optional(self.type)}


SymbolTypes = Union[
    FunctionTypes, PropertyTypes, InterfaceTypes, TypeAliasTypes, ClassTypes, FieldTypes
]


@dataclass
class Symbol:
    kind: SymbolKind
    name: str
    qualified_name: str
    types: SymbolTypes
    file: str = ""
    line: int = 0
    column: int = 1
    summary: str = ""
    description_markdown: str = ""
    tags: List[TagValue] = field(default_factory=list)
    visibility: Visibility = Visibility.PUBLIC

    @property
    def inherit_doc_target(self) -> str:
        for tag in self.tags:
            if tag.name == "inheritDoc" and isinstance(tag.value, str) and tag.value:
                return tag.value
        return ""


@dataclass
class Module:
    id: str
    path: str
    source_hash: str
    symbols: List[Symbol] = field(default_factory=list)


@dataclass
class Catalog:
    generator_version: str = "0.0.0"
    modules: List[Module] = field(default_factory=list)
    schema_version: int = 1
    luau_version: Optional[str] = None


@dataclass
class GenerationResult:
    catalog: Catalog
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.WARNING)

    @property
    def is_clean(self) -> bool:
        return not self.diagnostics
