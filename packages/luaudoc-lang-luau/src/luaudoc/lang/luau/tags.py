from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from luaudoc.spec import (
    ClassTag,
    ConstructorTag,
    Deprecation,
    ErrorInfo,
    FieldInfo,
    FunctionTag,
    InterfaceTag,
    ParamInfo,
    ParsedDoc,
    PropertyTag,
    ReturnInfo,
    TypeAliasTag,
    Visibility,
)

from .comments import dedent_lines

SIGIL = "@"
FENCE = "```"
SEPARATOR = "--"
SELF_OWNER = "~"


class ContinuationTarget(str, Enum):
    TYPE_TAG = "type_tag"
    FIELD = "field"
    PARAM = "param"
    RETURN = "return"
    ERROR = "error"


class ContinuationSlot(str, Enum):
    TYPE = "type"
    DESCRIPTION = "description"


@dataclass(frozen=True)
class Continuation:
    """Addresses the entry a following indented line extends."""

    target: ContinuationTarget
    index: int
    slot: ContinuationSlot


@dataclass
class MemberName:
    name: str
    within: str = ""
    is_method: bool = False


def split_tag_value(value: str) -> Tuple[str, str]:
    parts = value.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def parse_type_and_description(value: str) -> Tuple[str, str]:
    type_part, sep, description = value.partition(SEPARATOR)
    if not sep:
        return value.strip(), ""
    return type_part.strip(), description.strip()


def parse_member_name(raw: str) -> MemberName:
    """
    Splits owner shorthands off a member name.

    `~:name` and `~.name` refer to the block's own class; `Owner:name` marks a
    method when the last `:` follows the last `.`; `Owner.sub.name` is a plain
    member of `Owner.sub`.
    """
    if raw.startswith(SELF_OWNER + ":"):
        return MemberName(name=raw[2:], within=SELF_OWNER, is_method=True)
    if raw.startswith(SELF_OWNER + "."):
        return MemberName(name=raw[2:], within=SELF_OWNER)

    colon = raw.rfind(":")
    dot = raw.rfind(".")
    if colon != -1 and colon > dot:
        return MemberName(name=raw[colon + 1 :], within=raw[:colon], is_method=True)
    if dot != -1:
        return MemberName(name=raw[dot + 1 :], within=raw[:dot])
    return MemberName(name=raw)


def _is_continuation_indent(indent: str) -> bool:
    return bool(indent) and ("\t" in indent or len(indent) >= 2)


def _opens_tag_or_field(text: str) -> bool:
    return text.startswith(SIGIL) or text.startswith(".")


class DocBlockParser:
    """
    Line-oriented state machine turning dedented doc content into a ParsedDoc.

    One instance parses one block; use `parse_doc_block` for the common case.
    """

    def __init__(self) -> None:
        self.doc = ParsedDoc()
        self._continuation: Optional[Continuation] = None
        self._in_fence = False
        self._handlers: Dict[str, Callable[[str, str], None]] = {
            "class": self._on_class,
            "prop": self._on_prop,
            "type": self._on_type,
            "interface": self._on_interface,
            "function": self._on_function,
            "method": self._on_method,
            "constructor": self._on_constructor,
            "within": self._on_within,
            "field": self._on_field,
            "param": self._on_param,
            "return": self._on_return,
            "error": self._on_error,
            "yields": self._on_flag,
            "event": self._on_flag,
            "unreleased": self._on_flag,
            "readonly": self._on_flag,
            "tag": self._on_list,
            "category": self._on_list,
            "extends": self._on_list,
            "include": self._on_list,
            "snippet": self._on_list,
            "alias": self._on_list,
            "since": self._on_since,
            "deprecated": self._on_deprecated,
            "server": self._on_realm,
            "client": self._on_realm,
            "plugin": self._on_realm,
            "private": self._on_visibility,
            "ignore": self._on_visibility,
            "__index": self._on_index,
            "external": self._on_external,
            "inheritDoc": self._on_inherit_doc,
        }

    def parse(self, content_lines: Sequence[str]) -> ParsedDoc:
        for line in dedent_lines(content_lines):
            self._feed(line)
        return self.doc

    # --- Line dispatch ---

    def _feed(self, line: str) -> None:
        trimmed = line.strip()
        if trimmed.startswith(FENCE):
            self._in_fence = not self._in_fence

        if self._in_fence:
            self._continuation = None
            self.doc.description_lines.append(line.rstrip())
            return

        indent_size = len(line) - len(line.lstrip(" \t"))
        indent, rest = line[:indent_size], line[indent_size:]
        if (
            self._continuation is not None
            and _is_continuation_indent(indent)
            and not _opens_tag_or_field(rest.strip())
        ):
            self._continue(rest.rstrip())
            return

        self._continuation = None

        if trimmed.startswith(SIGIL):
            name, _, value = trimmed[1:].replace("\t", " ").partition(" ")
            handler = self._handlers.get(name)
            if handler:
                handler(name, value.strip())
            return

        if trimmed.startswith("."):
            self._on_shorthand_field(trimmed[1:].strip())
            return

        self.doc.description_lines.append(line.rstrip())

    def _continue(self, text: str) -> None:
        cont = self._continuation
        if cont.target == ContinuationTarget.TYPE_TAG:
            entry = self.doc.type_tags[cont.index]
        elif cont.target == ContinuationTarget.FIELD:
            entry = self.doc.fields[cont.index]
        elif cont.target == ContinuationTarget.PARAM:
            entry = self.doc.params[cont.index]
        elif cont.target == ContinuationTarget.RETURN:
            entry = self.doc.returns[cont.index]
        else:
            entry = self.doc.errors[cont.index]

        if cont.slot == ContinuationSlot.TYPE:
            entry.type = f"{entry.type} {text}" if entry.type else text
        elif isinstance(entry, FieldInfo):
            entry.description = (
                f"{entry.description}\n{text}" if entry.description else text
            )
        else:
            entry.description.append(text)

    def _open(self, target: ContinuationTarget, index: int, raw: str) -> None:
        slot = (
            ContinuationSlot.DESCRIPTION
            if SEPARATOR in raw
            else ContinuationSlot.TYPE
        )
        self._continuation = Continuation(target, index, slot)

    def _claim_owner(self, within: str) -> None:
        if within and not self.doc.state.within:
            self.doc.state.within = within

    # --- Type tags ---

    def _on_class(self, name: str, value: str) -> None:
        self.doc.type_tags.append(ClassTag(name=value))

    def _on_interface(self, name: str, value: str) -> None:
        self.doc.type_tags.append(InterfaceTag(name=value))

    def _on_prop(self, name: str, value: str) -> None:
        raw_name, rest = split_tag_value(value)
        member = parse_member_name(raw_name)
        self._claim_owner(member.within)
        type_part, description = parse_type_and_description(rest)
        self.doc.type_tags.append(
            PropertyTag(
                name=member.name,
                type=type_part,
                description=[description] if description else [],
            )
        )
        self._open(ContinuationTarget.TYPE_TAG, len(self.doc.type_tags) - 1, rest)

    def _on_type(self, name: str, value: str) -> None:
        type_name, rest = split_tag_value(value)
        type_part, description = parse_type_and_description(rest)
        self.doc.type_tags.append(
            TypeAliasTag(
                name=type_name,
                type=type_part,
                description=[description] if description else [],
            )
        )
        self._open(ContinuationTarget.TYPE_TAG, len(self.doc.type_tags) - 1, rest)

    def _on_function(self, name: str, value: str) -> None:
        member = parse_member_name(value)
        self._claim_owner(member.within)
        self.doc.type_tags.append(
            FunctionTag(name=member.name, is_method=member.is_method)
        )

    def _on_method(self, name: str, value: str) -> None:
        member = parse_member_name(value)
        self._claim_owner(member.within)
        self.doc.type_tags.append(FunctionTag(name=member.name, is_method=True))

    def _on_constructor(self, name: str, value: str) -> None:
        member = parse_member_name(value)
        self._claim_owner(member.within)
        self.doc.type_tags.append(ConstructorTag(name=member.name))

    # --- Signature entries ---

    def _on_field(self, name: str, value: str) -> None:
        field_name, rest = split_tag_value(value)
        type_part, description = parse_type_and_description(rest)
        self.doc.fields.append(
            FieldInfo(name=field_name, type=type_part, description=description)
        )
        self._open(ContinuationTarget.FIELD, len(self.doc.fields) - 1, rest)

    def _on_shorthand_field(self, value: str) -> None:
        field_name, rest = split_tag_value(value)
        type_part, description = parse_type_and_description(rest)
        self.doc.fields.append(
            FieldInfo(name=field_name, type=type_part, description=description)
        )

    def _on_param(self, name: str, value: str) -> None:
        param_name, rest = split_tag_value(value)
        type_part, description = parse_type_and_description(rest)
        self.doc.params.append(
            ParamInfo(
                name=param_name,
                type=type_part,
                description=[description] if description else [],
            )
        )
        self._open(ContinuationTarget.PARAM, len(self.doc.params) - 1, rest)

    def _on_return(self, name: str, value: str) -> None:
        type_part, description = parse_type_and_description(value)
        self.doc.returns.append(
            ReturnInfo(type=type_part, description=[description] if description else [])
        )
        self._open(ContinuationTarget.RETURN, len(self.doc.returns) - 1, value)

    def _on_error(self, name: str, value: str) -> None:
        type_part, description = parse_type_and_description(value)
        self.doc.errors.append(
            ErrorInfo(type=type_part, description=[description] if description else [])
        )
        self._open(ContinuationTarget.ERROR, len(self.doc.errors) - 1, value)

    # --- Metadata ---

    def _on_within(self, name: str, value: str) -> None:
        self.doc.state.within = value

    def _on_flag(self, name: str, value: str) -> None:
        setattr(self.doc.state, name, True)

    def _on_list(self, name: str, value: str) -> None:
        if not value:
            return
        attr = {
            "tag": "tags",
            "category": "categories",
            "extends": "extends",
            "include": "includes",
            "snippet": "snippets",
            "alias": "aliases",
        }[name]
        getattr(self.doc.state, attr).append(value)

    def _on_since(self, name: str, value: str) -> None:
        self.doc.state.since = value

    def _on_deprecated(self, name: str, value: str) -> None:
        version, description = parse_type_and_description(value)
        self.doc.state.deprecated = Deprecation(version=version, description=description)

    def _on_realm(self, name: str, value: str) -> None:
        self.doc.state.realms.append(name)

    def _on_visibility(self, name: str, value: str) -> None:
        self.doc.state.visibility = (
            Visibility.PRIVATE if name == "private" else Visibility.IGNORED
        )

    def _on_index(self, name: str, value: str) -> None:
        self.doc.state.index_name = value

    def _on_external(self, name: str, value: str) -> None:
        ext_name, rest = split_tag_value(value)
        if ext_name and rest:
            self.doc.externals.append((ext_name, rest))

    def _on_inherit_doc(self, name: str, value: str) -> None:
        self.doc.state.inherit_doc = value


def parse_doc_block(content_lines: Sequence[str]) -> ParsedDoc:
    return DocBlockParser().parse(content_lines)


def join_description(lines: Sequence[str]) -> Tuple[str, str]:
    """Returns (summary, description_markdown) for free description lines."""
    remaining: List[str] = list(lines)
    while remaining and not remaining[0].strip():
        remaining.pop(0)
    markdown = "\n".join(remaining).rstrip()
    summary = next((line.strip() for line in remaining if line.strip()), "")
    return summary, markdown
