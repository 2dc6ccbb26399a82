"""
Doc-comment span extraction for Luau sources.

Two physical forms are recognised:

    --- consecutive marker lines, merged while physically adjacent
    --- (marker plus at most one following space stripped per line)

    --[=[
        a long-bracket block of any level >= 1, closed by the
        matching `]=]`; an unterminated block runs to end of file.
    ]=]
"""

import re
from typing import List, Optional, Sequence, Tuple

from luaudoc.spec import DocBlock

MARKER = "---"
_OPENER = re.compile(r"--\[(=+)\[")


def _closer_for(level: str) -> str:
    return f"]{level}]"


def strip_marker(raw: str) -> str:
    pos = raw.find(MARKER)
    content = raw if pos == -1 else raw[pos + len(MARKER) :]
    if content.startswith(" "):
        content = content[1:]
    return content


def is_marker_line(line: str) -> bool:
    return line.strip().startswith(MARKER)


def find_opener(line: str) -> Optional[Tuple[int, str]]:
    match = _OPENER.search(line)
    if not match:
        return None
    return match.end(), _closer_for(match.group(1))


def dedent_lines(lines: Sequence[str]) -> List[str]:
    indents = [
        len(line) - len(line.lstrip(" \t")) for line in lines if line.strip()
    ]
    min_indent = min(indents) if indents else 0

    result = []
    for line in lines:
        if not line.strip():
            result.append("")
        else:
            result.append(line[min_indent:])
    return result


def _read_delimited(
    lines: Sequence[str], index: int, content_offset: int, closer: str
) -> Tuple[List[str], int, bool]:
    """
    Reads a delimited block whose opener ends at `content_offset` on line
    `index`. Returns (content, index of the closing line, found).
    """
    content: List[str] = []
    first = lines[index][content_offset:]

    same_line_end = first.find(closer)
    if same_line_end != -1:
        inner = first[:same_line_end]
        if inner:
            content.append(inner)
        return content, index, True

    if first:
        content.append(first)

    cursor = index + 1
    while cursor < len(lines):
        current = lines[cursor]
        end = current.find(closer)
        if end != -1:
            before = current[:end]
            if before:
                content.append(before)
            return content, cursor, True
        content.append(current)
        cursor += 1

    return content, len(lines) - 1, False


def extract_doc_blocks(lines: Sequence[str]) -> List[DocBlock]:
    blocks: List[DocBlock] = []
    index = 0

    while index < len(lines):
        line = lines[index]

        if is_marker_line(line):
            start = index
            content = []
            while index < len(lines) and is_marker_line(lines[index]):
                content.append(strip_marker(lines[index]))
                index += 1
            blocks.append(
                DocBlock(
                    start_line=start + 1,
                    end_line=index,
                    content_lines=tuple(dedent_lines(content)),
                )
            )
            continue

        opener = find_opener(line)
        if opener:
            offset, closer = opener
            content, end_index, found = _read_delimited(lines, index, offset, closer)
            blocks.append(
                DocBlock(
                    start_line=index + 1,
                    end_line=end_index + 1 if found else len(lines),
                    content_lines=tuple(dedent_lines(content)),
                )
            )
            index = end_index + 1 if found else len(lines)
            continue

        index += 1

    return blocks


def collect_inline_doc_lines(
    lines: Sequence[str], start_line: int, target_line: int
) -> List[str]:
    """
    Finds the comment span that immediately precedes `target_line` (1-based),
    without looking above `start_line`. Blank lines in between are skipped;
    anything else means there is no attached doc.
    """
    if target_line <= 1:
        return []

    index = target_line - 2
    min_index = max(0, start_line - 1)

    while index >= min_index and not lines[index].strip():
        index -= 1
    if index < min_index:
        return []

    if is_marker_line(lines[index]):
        end = index
        while index >= min_index and is_marker_line(lines[index]):
            index -= 1
        return [strip_marker(lines[i]) for i in range(index + 1, end + 1)]

    end = index
    if "]" not in lines[end]:
        return []
    while index >= min_index:
        opener = find_opener(lines[index])
        if opener:
            offset, closer = opener
            if lines[end].find(closer) == -1:
                return []
            content, close_index, found = _read_delimited(lines, index, offset, closer)
            if not found or close_index != end:
                return []
            return content
        index -= 1

    return []


def join_inline_description(lines: Sequence[str]) -> str:
    trimmed = dedent_lines(lines)
    while trimmed and not trimmed[0].strip():
        trimmed.pop(0)
    while trimmed and not trimmed[-1].strip():
        trimmed.pop()
    return "\n".join(line.rstrip() for line in trimmed).rstrip()


def delimited_end(lines: Sequence[str], index: int) -> Optional[int]:
    """Returns the closing line index when `lines[index]` starts a delimited block."""
    opener = find_opener(lines[index])
    if not opener or not lines[index].lstrip().startswith("--["):
        return None
    offset, closer = opener
    _, end_index, _ = _read_delimited(lines, index, offset, closer)
    return end_index
