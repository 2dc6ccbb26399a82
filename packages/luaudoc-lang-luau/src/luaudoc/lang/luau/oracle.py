import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Sequence, Tuple

from luaudoc.common import YamlAdapter
from luaudoc.spec import DocumentAdapter, RenderedType, TypeOracleProtocol

log = logging.getLogger(__name__)


def _to_rendered_type(entry: Any) -> Optional[RenderedType]:
    if isinstance(entry, str):
        return RenderedType(display=entry)
    if not isinstance(entry, dict):
        return None

    params = []
    for param in entry.get("params") or []:
        if isinstance(param, dict):
            params.append(
                (str(param.get("name") or ""), str(param.get("type") or ""))
            )
        else:
            params.append(("", str(param)))

    returns = [str(r) for r in entry.get("returns") or [] if r is not None]

    return RenderedType(
        display=str(entry.get("display") or ""),
        params=params,
        returns=returns,
        is_function="params" in entry or "returns" in entry,
        has_self=bool(entry.get("self", False)),
        method_display=str(entry.get("method_display") or ""),
    )


class SidecarTypeOracle(TypeOracleProtocol):
    """
    Serves inferred types recorded in a YAML sidecar.

    Keys are dotted paths (`Owner.sub.member`, or a bare `member` at module
    scope). Values are either a display string or a mapping with `display`,
    `method_display`, `params` (list of `{name, type}`), `returns` and `self`.
    """

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = dict(entries or {})

    @classmethod
    def from_file(
        cls, path: Path, adapter: Optional[DocumentAdapter] = None
    ) -> "SidecarTypeOracle":
        adapter = adapter or YamlAdapter()
        if not path.exists():
            log.warning("Type sidecar %s does not exist; types will be absent.", path)
            return cls()

        entries = adapter.load(path)
        if not entries:
            log.warning("Type sidecar %s is empty or malformed.", path)
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(
        self, owner_path: Sequence[str], member_name: str
    ) -> Optional[RenderedType]:
        key = ".".join([*owner_path, member_name])
        if key not in self._entries:
            return None
        return _to_rendered_type(self._entries[key])


class CachingTypeOracle(TypeOracleProtocol):
    def __init__(self, inner: TypeOracleProtocol):
        self._inner = inner
        self._cache: Dict[Tuple[Tuple[str, ...], str], Optional[RenderedType]] = {}
        self._lock = Lock()

    def resolve(
        self, owner_path: Sequence[str], member_name: str
    ) -> Optional[RenderedType]:
        key = (tuple(owner_path), member_name)
        with self._lock:
            if key in self._cache:
                return self._cache[key]
        result = self._inner.resolve(owner_path, member_name)
        with self._lock:
            self._cache.setdefault(key, result)
            return self._cache[key]
