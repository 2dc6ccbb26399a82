import re
from typing import List, Optional, Sequence, Tuple

from luaudoc.spec import Binding, BindingSourceProtocol, FieldInfo, ParamInfo, SymbolKind

from .comments import collect_inline_doc_lines, delimited_end, join_inline_description

_FUNCTION_DECL = re.compile(r"^(?:local\s+)?function\s+([A-Za-z0-9_.:]+)(?:<[^>]+>)?\s*\(")
_FUNCTION_ASSIGN = re.compile(r"^([A-Za-z0-9_.]+)\s*=\s*function(?:<[^>]+>)?\s*\(")
_RETURN_TYPE = re.compile(r"^\s*:\s*(.+)$")
_TYPE_TABLE = re.compile(r"^\s*(export\s+)?type\s+([A-Za-z_]\w*)(<[^>]+>)?\s*=\s*\{")
_PROPERTY_ASSIGN = re.compile(r"^([A-Za-z0-9_.]+)\s*=")
_CLASS_TABLE = re.compile(r"^local\s+([A-Za-z0-9_]+)\s*=\s*\{")
_FIELD = re.compile(r"^\s*([A-Za-z_]\w*)\s*:\s*(.*)$")
_NAME = re.compile(r"^([A-Za-z_]\w*)")


def strip_line_comment(line: str) -> str:
    return line.split("--", 1)[0]


def find_column(line: str) -> int:
    stripped = line.lstrip(" \t")
    if not stripped:
        return 1
    return len(line) - len(stripped) + 1


_OPENERS = "([{<"
_CLOSERS = ")]}>"


def split_top_level(text: str) -> List[str]:
    """Splits on commas outside brackets, generics and function types."""
    parts: List[str] = []
    depth = 0
    start = 0
    for position, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            if char == ">" and position > 0 and text[position - 1] == "-":
                continue
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            parts.append(text[start:position])
            start = position + 1
    parts.append(text[start:])
    return parts


def closing_paren(text: str, open_index: int) -> int:
    depth = 0
    for position in range(open_index, len(text)):
        if text[position] == "(":
            depth += 1
        elif text[position] == ")":
            depth -= 1
            if depth == 0:
                return position
    return -1


def parse_param_list(text: str) -> List[ParamInfo]:
    params: List[ParamInfo] = []
    for part in split_top_level(text):
        token = part.strip()
        if not token:
            continue
        if token.startswith("..."):
            name = "..."
        else:
            match = _NAME.match(token)
            name = match.group(1) if match else token
        type_text = ""
        if ":" in token:
            type_text = token.split(":", 1)[1].split("=", 1)[0].strip()
        params.append(ParamInfo(name=name, type=type_text))
    return params


def split_owner(raw: str) -> Tuple[str, str, bool]:
    colon = raw.rfind(":")
    dot = raw.rfind(".")
    if colon != -1 and colon > dot:
        return raw[:colon], raw[colon + 1 :], True
    if dot != -1:
        return raw[:dot], raw[dot + 1 :], False
    return "", raw, False


def _function_binding(raw_name: str, head: str, open_index: int, line: int) -> Binding:
    close_index = closing_paren(head, open_index)
    if close_index == -1:
        params_text, rest = head[open_index + 1 :], ""
    else:
        params_text, rest = head[open_index + 1 : close_index], head[close_index + 1 :]
    returns = _RETURN_TYPE.match(rest)

    params = parse_param_list(params_text)
    within, name, is_method = split_owner(raw_name)
    if not is_method and within and params and params[0].name == "self":
        is_method = True
    return Binding(
        kind=SymbolKind.FUNCTION,
        name=name,
        line=line,
        within=within,
        is_method=is_method,
        params=params,
        return_type=returns.group(1).strip() if returns else "",
    )


def function_head(lines: Sequence[str], index: int) -> Tuple[str, int]:
    """
    Joins a function header with its continuation lines until the
    parentheses balance, so signatures split across lines read as one.
    Returns the joined text and the index of the last line it consumed.
    """
    head = strip_line_comment(lines[index]).strip()
    depth = head.count("(") - head.count(")")
    end = index
    while depth > 0 and end + 1 < len(lines):
        end += 1
        part = strip_line_comment(lines[end]).strip()
        depth += part.count("(") - part.count(")")
        if part:
            head = f"{head} {part}"
    return head, end


class LuauBindingScanner(BindingSourceProtocol):
    """
    A line-based declaration scanner for Luau sources.

    It recognises the declaration shapes doc comments conventionally sit on
    top of; it is not a parser and makes no attempt at full Luau syntax.
    Function headers may span several lines.
    """

    def scan(self, lines: Sequence[str]) -> List[Binding]:
        bindings: List[Binding] = []
        index = 0
        while index < len(lines):
            comment_end = delimited_end(lines, index)
            if comment_end is not None:
                index = comment_end + 1
                continue
            binding, last_index = self._binding_at(lines, index)
            if binding is None:
                index += 1
                continue
            bindings.append(binding)
            if binding.has_record_shape:
                # Field lines of a record body are not declarations.
                index = binding.type_table_span[1]
            else:
                index = last_index + 1
        return sorted(bindings, key=lambda b: b.line)

    def _binding_at(
        self, lines: Sequence[str], index: int
    ) -> Tuple[Optional[Binding], int]:
        clean = strip_line_comment(lines[index])
        trimmed = clean.strip()
        line_no = index + 1

        for pattern in (_FUNCTION_DECL, _FUNCTION_ASSIGN):
            if pattern.match(trimmed):
                head, last_index = function_head(lines, index)
                match = pattern.match(head)
                binding = _function_binding(match.group(1), head, match.end() - 1, line_no)
                return binding, last_index

        match = _TYPE_TABLE.match(clean)
        if match:
            fields, end_index = self._record_fields(lines, index)
            binding = Binding(
                kind=SymbolKind.TYPE,
                name=match.group(2),
                line=line_no,
                type_fields=fields,
                type_table_span=(line_no, end_index + 1),
            )
            return binding, end_index

        match = _PROPERTY_ASSIGN.match(clean)
        if match and "." in match.group(1):
            within, name, _ = split_owner(match.group(1))
            binding = Binding(
                kind=SymbolKind.PROPERTY, name=name, line=line_no, within=within
            )
            return binding, index

        match = _CLASS_TABLE.match(clean)
        if match:
            return Binding(kind=SymbolKind.CLASS, name=match.group(1), line=line_no), index

        return None, index

    def _record_fields(
        self, lines: Sequence[str], start_index: int
    ) -> Tuple[List[FieldInfo], int]:
        """
        Walks a `type T = { ... }` body by brace depth. Only depth-1 entries
        are fields; nested record text is folded into the owning field's type.
        """
        fields: List[FieldInfo] = []
        opening = strip_line_comment(lines[start_index])
        depth = opening.count("{") - opening.count("}")
        if depth <= 0:
            return fields, start_index

        index = start_index + 1
        while index < len(lines):
            comment_end = delimited_end(lines, index)
            if comment_end is not None:
                index = comment_end + 1
                continue

            raw = lines[index]
            clean = strip_line_comment(raw)
            depth_before = depth
            depth += clean.count("{") - clean.count("}")

            match = _FIELD.match(clean) if depth_before == 1 else None
            if match:
                parts = [match.group(2).strip()]
                field_index = index
                while depth > 1 and index + 1 < len(lines):
                    index += 1
                    nested = strip_line_comment(lines[index])
                    depth += nested.count("{") - nested.count("}")
                    parts.append(nested.strip())
                type_text = " ".join(p for p in parts if p)
                if depth <= 0:
                    type_text = type_text[: type_text.rfind("}")]
                type_text = type_text.strip().rstrip(",").strip()

                doc_lines = collect_inline_doc_lines(lines, start_index + 2, field_index + 1)
                fields.append(
                    FieldInfo(
                        name=match.group(1),
                        type=type_text,
                        description=join_inline_description(doc_lines),
                        line=field_index + 1,
                        column=find_column(raw),
                    )
                )

            if depth <= 0:
                return fields, index
            index += 1

        return fields, len(lines) - 1
