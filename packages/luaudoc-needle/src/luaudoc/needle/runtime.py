import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .loader import Loader
from .pointer import SemanticPointer

LANG_ENV = "LUAUDOC_LANG"
OVERRIDE_DIR = ".luaudoc"


def find_project_root(start_dir: Optional[Path] = None) -> Path:
    """Searches upwards for pyproject.toml, then .git."""
    start = start_dir or Path.cwd()
    current_dir = start.resolve()
    while current_dir.parent != current_dir:
        if (current_dir / "pyproject.toml").is_file():
            return current_dir
        if (current_dir / ".git").is_dir():
            return current_dir
        current_dir = current_dir.parent
    return start


class Needle:
    """
    Resolves semantic pointers to message templates.

    Roots are layered from lowest to highest priority: packaged defaults come
    first and the project root last. Within one root, `needle/<lang>` is read
    before the `.luaudoc/needle/<lang>` overrides.
    """

    def __init__(self, roots: Optional[List[Path]] = None, default_lang: str = "en"):
        self.default_lang = default_lang
        self.roots: List[Path] = list(roots) if roots else [find_project_root()]
        self._loader = Loader()
        self._registry: Dict[str, Dict[str, str]] = {}  # lang -> {key: template}

    def add_root(self, path: Path):
        """Adds a search root with the lowest priority (a default layer)."""
        if path not in self.roots:
            self.roots.insert(0, path)
            self.reload()

    def set_project_root(self, path: Path):
        """Replaces the highest-priority root, e.g. for an explicit `--root`."""
        if self.roots and self.roots[-1] == path:
            return
        self.roots[-1:] = [path]
        self.reload()

    def reload(self):
        self._registry.clear()

    @staticmethod
    def _catalog_dirs(root: Path, lang: str) -> Tuple[Path, Path]:
        return root / "needle" / lang, root / OVERRIDE_DIR / "needle" / lang

    def _templates(self, lang: str) -> Dict[str, str]:
        if lang not in self._registry:
            merged: Dict[str, str] = {}
            for root in self.roots:
                for directory in self._catalog_dirs(root, lang):
                    merged.update(self._loader.load_directory(directory))
            self._registry[lang] = merged
        return self._registry[lang]

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Lookup order: target language, default language, then the key itself.
        """
        key = str(pointer)
        target_lang = lang or os.getenv(LANG_ENV, self.default_lang)

        for candidate in (target_lang, self.default_lang):
            template = self._templates(candidate).get(key)
            if template is not None:
                return template
        return key


needle = Needle()
