from typing import Any, Tuple


class SemanticPointer:
    """
    A dotted message address built by attribute access, e.g.
    `L.generate.module.success` -> "generate.module.success".

    Underscore names are never treated as segments, so protocol probes such
    as `copy.copy` or `hasattr(L, "__len__")` behave normally.
    """

    __slots__ = ("_segments",)

    def __init__(self, path: str = ""):
        self._segments: Tuple[str, ...] = tuple(p for p in path.split(".") if p)

    @classmethod
    def _from_segments(cls, segments: Tuple[str, ...]) -> "SemanticPointer":
        pointer = cls()
        pointer._segments = segments
        return pointer

    def __getattr__(self, name: str) -> "SemanticPointer":
        if name.startswith("_"):
            raise AttributeError(name)
        return self._from_segments(self._segments + (name,))

    def __str__(self) -> str:
        return ".".join(self._segments)

    def __repr__(self) -> str:
        return f"<SemanticPointer: '{self}'>"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SemanticPointer):
            return self._segments == other._segments
        return str(other) == str(self)

    def __hash__(self) -> int:
        return hash(str(self))


# Root anchor.
L = SemanticPointer()
