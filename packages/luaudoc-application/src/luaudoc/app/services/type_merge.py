from typing import List, Optional, Sequence

from luaudoc.spec import (
    Binding,
    FunctionTypes,
    ParamInfo,
    ParsedDoc,
    PropertyTypes,
    RenderedType,
    ReturnInfo,
    TypeAliasTypes,
)

UNRESOLVED_RETURN = "any"


def synthesize_display(params: Sequence[ParamInfo], returns: Sequence[ReturnInfo]) -> str:
    rendered_params = ", ".join(
        f"{p.name}: {p.type}" if p.type else p.name for p in params
    )
    display = f"({rendered_params})"
    if returns:
        display += " -> " + ", ".join(r.type or UNRESOLVED_RETURN for r in returns)
    return display


def _fill_param_types(params: List[ParamInfo], rendered: Optional[RenderedType]) -> None:
    if rendered is None:
        return
    for index, param in enumerate(params):
        if param.type:
            continue
        by_name = rendered.param_type_for(param.name)
        if by_name:
            param.type = by_name
        elif index < len(rendered.params):
            param.type = rendered.params[index][1]


def _copy_param(param: ParamInfo) -> ParamInfo:
    return ParamInfo(name=param.name, type=param.type, description=list(param.description))


def merge_function_types(
    doc: ParsedDoc, binding: Optional[Binding], rendered: Optional[RenderedType]
) -> FunctionTypes:
    """
    Merges documented, syntactic and inferred signature facts.

    Documentation wins field by field; the binding fills parameter types by
    name; the oracle fills whatever is still empty, by name then by position.
    An oracle type that is not function-shaped contributes its display only.
    """
    binding_params = binding.params if binding else []
    display = rendered.display if rendered is not None and rendered.display else ""
    if rendered is not None and not rendered.is_function:
        rendered = None

    if doc.params:
        params = []
        for documented in doc.params:
            merged = _copy_param(documented)
            if not merged.type:
                matched = next(
                    (p for p in binding_params if p.name == documented.name), None
                )
                if matched:
                    merged.type = matched.type
            params.append(merged)
        _fill_param_types(params, rendered)
    elif binding:
        params = [_copy_param(p) for p in binding_params]
        _fill_param_types(params, rendered)
    elif rendered is not None:
        params = [
            ParamInfo(name=name, type=type_text)
            for name, type_text in rendered.params
            if name
        ]
    else:
        params = []

    if doc.returns:
        returns = [
            ReturnInfo(type=r.type, description=list(r.description)) for r in doc.returns
        ]
        if rendered is not None:
            for index, ret in enumerate(returns):
                if not ret.type and index < len(rendered.returns):
                    ret.type = rendered.returns[index]
    elif rendered is not None and rendered.returns:
        returns = [ReturnInfo(type=type_text) for type_text in rendered.returns]
    elif binding and binding.return_type:
        returns = [ReturnInfo(type=binding.return_type)]
    else:
        returns = []

    return FunctionTypes(
        display=display or synthesize_display(params, returns),
        params=params,
        returns=returns,
        errors=list(doc.errors),
        yields=doc.state.yields,
    )


def merge_property_types(
    declared_type: str, readonly: bool, rendered: Optional[RenderedType]
) -> PropertyTypes:
    resolved = declared_type or (rendered.display if rendered is not None else "")
    return PropertyTypes(display=resolved, type=resolved, readonly=readonly)


def merge_type_alias_types(
    declared_type: str, rendered: Optional[RenderedType]
) -> TypeAliasTypes:
    resolved = declared_type or (rendered.display if rendered is not None else "")
    return TypeAliasTypes(display=resolved, type=resolved)
