from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .models import Binding, Catalog, RenderedType


class TypeOracleProtocol(Protocol):
    """
    Read-only capability resolving a declaration's inferred type by path.

    Implementations must be idempotent and free of side effects, so that
    modules can be resolved concurrently against a shared oracle.
    """

    def resolve(
        self, owner_path: Sequence[str], member_name: str
    ) -> Optional[RenderedType]: ...


class BindingSourceProtocol(Protocol):
    def scan(self, lines: Sequence[str]) -> List[Binding]:
        """Returns the declarations of a file, sorted ascending by line."""
        ...


class CatalogWriterProtocol(Protocol):
    @property
    def format_name(self) -> str: ...

    def dumps(self, catalog: Catalog) -> str: ...

    def write(self, catalog: Catalog, path: Path) -> None: ...


class DocumentAdapter(Protocol):
    """
    Protocol for sidecar storage adapters.

    Reads plain dictionary data from a physical file format.
    """

    def load(self, path: Path) -> Dict[str, Any]:
        """
        Loads the mapping stored in the specified file.

        Returns an empty dict if the file does not exist or cannot be parsed.
        """
        ...
