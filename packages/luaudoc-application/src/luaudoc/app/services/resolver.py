from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from luaudoc.lang.luau import CONSTRUCTOR_NAME, join_description, parse_doc_block
from luaudoc.lang.luau.bindings import find_column
from luaudoc.lang.luau.tags import SELF_OWNER
from luaudoc.spec import (
    MEMBER_KINDS,
    Binding,
    ClassTag,
    ClassTypes,
    DocBlock,
    FieldInfo,
    FieldTypes,
    InterfaceTypes,
    ParsedDoc,
    PropertyTag,
    RenderedType,
    Symbol,
    SymbolKind,
    SymbolTypes,
    TagValue,
    TypeAliasTag,
    TypeOracleProtocol,
    Visibility,
    tag_is_method,
    tag_type_text,
)

from .diagnostics import (
    AMBIGUOUS_OWNER,
    MISSING_CLASS,
    PARAM_DRIFT,
    READONLY_MISUSE,
    DiagnosticCollector,
)
from .type_merge import (
    merge_function_types,
    merge_property_types,
    merge_type_alias_types,
)

_FUNCTION_KINDS = (SymbolKind.FUNCTION, SymbolKind.CONSTRUCTOR)


def class_names(docs: Iterable[ParsedDoc]) -> List[str]:
    names: List[str] = []
    for doc in docs:
        for tag in doc.type_tags:
            if isinstance(tag, ClassTag) and tag.name and tag.name not in names:
                names.append(tag.name)
    return names


@dataclass
class ClassTracker:
    """
    Every class declared in the module, plus the most recent one seen while
    walking its blocks in order. Only `~` owners read `current`.
    """

    names: List[str] = field(default_factory=list)
    current: str = ""

    def observe(self, doc: ParsedDoc) -> None:
        for tag in doc.type_tags:
            if isinstance(tag, ClassTag) and tag.name:
                self.current = tag.name


def qualify(within: str, name: str, is_method: bool) -> str:
    if not within:
        return name
    return f"{within}:{name}" if is_method else f"{within}.{name}"


def find_governing_binding(
    bindings: Sequence[Binding], block: DocBlock
) -> Optional[Binding]:
    for binding in bindings:
        if binding.line > block.end_line:
            return binding
    return None


def build_tags(doc: ParsedDoc) -> List[TagValue]:
    state = doc.state
    tags = [TagValue("tag", value) for value in state.tags]
    tags.extend(TagValue("category", value) for value in state.categories)
    if state.since:
        tags.append(TagValue("since", state.since))
    if state.unreleased:
        tags.append(TagValue("unreleased", True))
    if state.event:
        tags.append(TagValue("event", True))
    tags.extend(TagValue("extends", value) for value in state.extends)
    if state.deprecated and state.deprecated.version:
        tags.append(
            TagValue(
                "deprecated",
                state.deprecated.version,
                state.deprecated.description,
            )
        )
    tags.extend(TagValue(realm, True) for realm in state.realms)
    tags.extend(TagValue("external", f"{name} {value}") for name, value in doc.externals)
    tags.extend(TagValue("alias", value) for value in state.aliases)
    tags.extend(TagValue("include", value) for value in state.includes)
    tags.extend(TagValue("snippet", value) for value in state.snippets)
    if state.inherit_doc:
        tags.append(TagValue("inheritDoc", state.inherit_doc))
    return tags


class SymbolResolver:
    """
    Pairs each doc block of a module with its governing binding and builds
    the module's symbols, merging doc, syntax and oracle type facts.

    One resolver can serve many modules concurrently; all per-module state
    lives in locals and in the collector passed to `resolve`.
    """

    def __init__(self, oracle: Optional[TypeOracleProtocol] = None):
        self.oracle = oracle

    def resolve(
        self,
        file: str,
        lines: Sequence[str],
        blocks: Sequence[DocBlock],
        bindings: Sequence[Binding],
        diagnostics: DiagnosticCollector,
    ) -> List[Symbol]:
        symbols: List[Symbol] = []
        docs = [parse_doc_block(block.content_lines) for block in blocks]
        classes = ClassTracker(names=class_names(docs))
        record_bindings = [b for b in bindings if b.has_record_shape]

        for block, doc in zip(blocks, docs):
            if any(b.spans_line(block.start_line) for b in record_bindings):
                continue

            classes.observe(doc)
            binding = find_governing_binding(bindings, block)
            symbols.extend(
                self._resolve_block(file, lines, block, doc, binding, classes, diagnostics)
            )

        return symbols

    def _lookup(
        self, within: str, name: str, is_method: bool
    ) -> Optional[RenderedType]:
        if self.oracle is None:
            return None
        owner_path = [part for part in within.split(".") if part] if within else []
        rendered = self.oracle.resolve(owner_path, name)
        if rendered is not None and is_method:
            rendered = rendered.as_method()
        return rendered

    def _resolve_block(
        self,
        file: str,
        lines: Sequence[str],
        block: DocBlock,
        doc: ParsedDoc,
        binding: Optional[Binding],
        classes: ClassTracker,
        diagnostics: DiagnosticCollector,
    ) -> List[Symbol]:
        primary = doc.primary_tag

        # Kind, name and method-ness: the type tag wins over the binding.
        if primary is not None:
            kind = primary.kind
            name = primary.name or (binding.name if binding else "")
            is_method = tag_is_method(primary)
        elif binding is not None:
            kind = binding.kind
            name = binding.name
            is_method = binding.is_method
        else:
            return []

        within = doc.state.within
        if within == SELF_OWNER:
            within = classes.current

        if not within and binding is not None and binding.within:
            binding_matches = primary is None or binding.kind == kind or (
                binding.kind == SymbolKind.FUNCTION and kind in _FUNCTION_KINDS
            )
            if binding_matches:
                within = binding.within

        if not within and kind in MEMBER_KINDS:
            if len(classes.names) == 1:
                within = classes.names[0]
            elif not classes.names:
                diagnostics.error(block.start_line, MISSING_CLASS)
            else:
                diagnostics.warning(block.start_line, AMBIGUOUS_OWNER)

        if (
            kind == SymbolKind.FUNCTION
            and name == CONSTRUCTOR_NAME
            and not is_method
            and within
        ):
            kind = SymbolKind.CONSTRUCTOR

        if not name:
            return []

        if doc.state.readonly and kind != SymbolKind.PROPERTY:
            diagnostics.warning(block.start_line, READONLY_MISUSE)

        line = binding.line if binding is not None else block.start_line
        summary, description = join_description(doc.description_lines)
        if not description and isinstance(primary, (PropertyTag, TypeAliasTag)):
            summary, description = join_description(primary.description)

        visibility = doc.state.visibility or Visibility.PUBLIC
        symbol = Symbol(
            kind=kind,
            name=name,
            qualified_name=qualify(within, name, is_method),
            types=self._merge_types(kind, name, within, is_method, doc, binding),
            file=file,
            line=line,
            column=self._column(lines, line),
            summary=summary,
            description_markdown=description,
            tags=build_tags(doc),
            visibility=visibility,
        )

        result = [symbol]
        result.extend(self._field_symbols(file, lines, block, doc, binding, symbol))
        result.extend(self._sibling_properties(file, lines, block, doc, symbol, within))

        if binding is not None and kind in _FUNCTION_KINDS:
            self._check_param_drift(block, doc, binding, diagnostics)

        return result

    @staticmethod
    def _column(lines: Sequence[str], line: int) -> int:
        if 1 <= line <= len(lines):
            return find_column(lines[line - 1])
        return 1

    def _merge_types(
        self,
        kind: SymbolKind,
        name: str,
        within: str,
        is_method: bool,
        doc: ParsedDoc,
        binding: Optional[Binding],
    ) -> SymbolTypes:
        primary = doc.primary_tag
        declared = tag_type_text(primary) if primary is not None else ""

        if kind in _FUNCTION_KINDS:
            rendered = self._lookup(within, name, is_method)
            return merge_function_types(doc, binding, rendered)
        if kind == SymbolKind.PROPERTY:
            rendered = None if declared else self._lookup(within, name, False)
            return merge_property_types(declared, doc.state.readonly, rendered)
        if kind == SymbolKind.TYPE:
            rendered = None if declared else self._lookup(within, name, False)
            return merge_type_alias_types(declared, rendered)
        if kind == SymbolKind.INTERFACE:
            return InterfaceTypes(fields=list(doc.fields))
        return ClassTypes(index_name=doc.state.index_name)

    def _field_symbols(
        self,
        file: str,
        lines: Sequence[str],
        block: DocBlock,
        doc: ParsedDoc,
        binding: Optional[Binding],
        parent: Symbol,
    ) -> List[Symbol]:
        if parent.kind == SymbolKind.INTERFACE:
            documented = True
            fields: Sequence[FieldInfo] = doc.fields
        elif parent.kind == SymbolKind.TYPE and doc.fields:
            documented = True
            fields = doc.fields
        elif (
            parent.kind == SymbolKind.TYPE
            and binding is not None
            and binding.has_record_shape
        ):
            documented = False
            fields = binding.type_fields
        else:
            return []

        symbols = []
        for info in fields:
            if not info.name:
                continue
            if documented or info.line <= 0:
                line, column = block.start_line, self._column(lines, block.start_line)
            else:
                line, column = info.line, info.column
            summary, _ = join_description(info.description.splitlines())
            symbols.append(
                Symbol(
                    kind=SymbolKind.FIELD,
                    name=info.name,
                    qualified_name=f"{parent.qualified_name}.{info.name}",
                    types=FieldTypes(display=info.type, type=info.type),
                    file=file,
                    line=line,
                    column=column,
                    summary=summary,
                    description_markdown=info.description,
                    visibility=parent.visibility,
                )
            )
        return symbols

    def _sibling_properties(
        self,
        file: str,
        lines: Sequence[str],
        block: DocBlock,
        doc: ParsedDoc,
        primary_symbol: Symbol,
        within: str,
    ) -> List[Symbol]:
        primary = doc.primary_tag
        owner = primary.name if isinstance(primary, ClassTag) else within

        symbols = []
        for tag in doc.type_tags[1:]:
            if not isinstance(tag, PropertyTag) or not tag.name:
                continue
            rendered = None if tag.type else self._lookup(owner, tag.name, False)
            summary, description = join_description(tag.description)
            symbols.append(
                Symbol(
                    kind=SymbolKind.PROPERTY,
                    name=tag.name,
                    qualified_name=qualify(owner, tag.name, False),
                    types=merge_property_types(tag.type, False, rendered),
                    file=file,
                    line=block.start_line,
                    column=self._column(lines, block.start_line),
                    summary=summary,
                    description_markdown=description,
                    visibility=primary_symbol.visibility,
                )
            )
        return symbols

    @staticmethod
    def _check_param_drift(
        block: DocBlock,
        doc: ParsedDoc,
        binding: Binding,
        diagnostics: DiagnosticCollector,
    ) -> None:
        explicit = any(p.type.strip() and p.type.strip() != "any" for p in doc.params)
        if not explicit:
            return
        documented = {p.name for p in doc.params}
        declared = {p.name for p in binding.params}
        if documented - declared or declared - documented:
            diagnostics.warning(block.start_line, PARAM_DRIFT)
