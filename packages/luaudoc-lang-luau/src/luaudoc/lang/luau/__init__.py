__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .bindings import LuauBindingScanner, parse_param_list
from .comments import (
    collect_inline_doc_lines,
    dedent_lines,
    extract_doc_blocks,
    join_inline_description,
)
from .oracle import CachingTypeOracle, SidecarTypeOracle
from .tags import (
    Continuation,
    DocBlockParser,
    join_description,
    parse_doc_block,
    parse_member_name,
    parse_type_and_description,
    split_tag_value,
)

SOURCE_SUFFIXES = (".luau", ".lua")
CONSTRUCTOR_NAME = "new"

__all__ = [
    "SOURCE_SUFFIXES",
    "CONSTRUCTOR_NAME",
    "CachingTypeOracle",
    "Continuation",
    "DocBlockParser",
    "LuauBindingScanner",
    "SidecarTypeOracle",
    "collect_inline_doc_lines",
    "dedent_lines",
    "extract_doc_blocks",
    "join_description",
    "join_inline_description",
    "parse_doc_block",
    "parse_member_name",
    "parse_param_list",
    "parse_type_and_description",
    "split_tag_value",
]
