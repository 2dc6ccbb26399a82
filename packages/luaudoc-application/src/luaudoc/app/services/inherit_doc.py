import copy
from typing import Dict, List

from luaudoc.spec import Symbol


def apply_inherit_docs(symbols: List[Symbol]) -> None:
    """
    Fills gaps in symbols declaring `@inheritDoc` from their target, in place.

    Targets are looked up by qualified name within the same module; on
    duplicate names the later symbol wins. Unknown targets are ignored.
    """
    by_name: Dict[str, int] = {}
    for index, symbol in enumerate(symbols):
        by_name[symbol.qualified_name] = index

    for symbol in symbols:
        target_name = symbol.inherit_doc_target
        if not target_name or target_name not in by_name:
            continue
        target = symbols[by_name[target_name]]
        if target is symbol:
            continue

        if not symbol.description_markdown and target.description_markdown:
            symbol.description_markdown = target.description_markdown
            symbol.summary = target.summary

        only_inherit = len(symbol.tags) == 1 and symbol.tags[0].name == "inheritDoc"
        if (not symbol.tags or only_inherit) and target.tags:
            symbol.tags = copy.deepcopy(target.tags)

        if not symbol.types.display and target.types.display:
            symbol.types = copy.deepcopy(target.types)
