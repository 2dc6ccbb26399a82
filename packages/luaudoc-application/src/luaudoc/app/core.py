import hashlib
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from luaudoc.common import bus
from luaudoc.config import LuaudocConfig, load_config_from_path
from luaudoc.io import make_writer
from luaudoc.lang.luau import SOURCE_SUFFIXES, CachingTypeOracle, SidecarTypeOracle
from luaudoc.needle import L
from luaudoc.spec import (
    Catalog,
    Diagnostic,
    DiagnosticLevel,
    GenerationResult,
    Module,
    TypeOracleProtocol,
)
from luaudoc.app.runners import CheckRunner, GenerateRunner
from luaudoc.app.services import ModuleBuilder

log = logging.getLogger(__name__)

DUPLICATE_MODULE = "Duplicate module name detected."
SKIPPED_DIRS = ("node_modules",)


def collect_source_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []

    files: List[Path] = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            if entry.name not in SKIPPED_DIRS:
                files.extend(collect_source_files(entry))
        elif entry.suffix in SOURCE_SUFFIXES:
            files.append(entry)
    return files


def split_source_lines(raw: bytes) -> List[str]:
    text = raw.decode("utf-8", errors="replace")
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
        return True
    except ValueError:
        return False


@dataclass
class SourceFile:
    path: Path
    relative_path: str
    module_id: str
    lines: List[str]
    source_hash: str


class DocgenApp:
    def __init__(
        self,
        root_path: Path,
        config: Optional[LuaudocConfig] = None,
        oracle: Optional[TypeOracleProtocol] = None,
    ):
        self.root_path = root_path
        self.config = config or load_config_from_path(root_path)
        self.oracle = oracle if oracle is not None else self._load_oracle()
        self.builder = ModuleBuilder(self.oracle)

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        return path if path.is_absolute() else self.root_path / path

    @property
    def src_dir(self) -> Path:
        return self._resolve(self.config.src_dir)

    @property
    def types_dir(self) -> Optional[Path]:
        return self._resolve(self.config.types_dir) if self.config.types_dir else None

    def _load_oracle(self) -> Optional[TypeOracleProtocol]:
        if not self.config.types_file:
            return None
        return CachingTypeOracle(
            SidecarTypeOracle.from_file(self._resolve(self.config.types_file))
        )

    def _relative_to_root(self, path: Path) -> str:
        return Path(os.path.relpath(path, self.root_path)).as_posix()

    def discover_files(self) -> List[Path]:
        found = collect_source_files(self.src_dir)
        if self.types_dir is not None:
            found.extend(collect_source_files(self.types_dir))

        unique: Dict[Path, None] = {}
        for path in found:
            unique.setdefault(path, None)
        return list(unique)

    def module_id_for(self, file_path: Path) -> str:
        relative = self._relative_to_root(file_path)
        override = self.config.module_id_overrides.get(relative)
        if override:
            return override

        base_dir = self.root_path
        if _is_within(file_path, self.src_dir):
            base_dir = self.src_dir
        elif self.types_dir is not None and _is_within(file_path, self.types_dir):
            base_dir = self.types_dir
        return Path(os.path.relpath(file_path, base_dir)).with_suffix("").as_posix()

    def read_source(self, file_path: Path) -> Optional[SourceFile]:
        relative = self._relative_to_root(file_path)
        try:
            raw = file_path.read_bytes()
        except OSError as e:
            log.warning("Skipping unreadable source %s: %s", file_path, e)
            bus.error(L.error.read_failed, path=relative, error=e)
            return None

        return SourceFile(
            path=file_path,
            relative_path=relative,
            module_id=self.module_id_for(file_path),
            lines=split_source_lines(raw),
            source_hash=hashlib.sha1(raw).hexdigest(),
        )

    def _build_one(self, file_path: Path) -> Optional[Tuple[Module, List[Diagnostic]]]:
        source = self.read_source(file_path)
        if source is None:
            return None
        return self.builder.build(
            source.module_id, source.relative_path, source.lines, source.source_hash
        )

    def build_catalog(self, files: Optional[List[Path]] = None) -> GenerationResult:
        files = self.discover_files() if files is None else files

        if self.config.jobs > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self.config.jobs) as pool:
                results = list(pool.map(self._build_one, files))
        else:
            results = [self._build_one(path) for path in files]

        modules: List[Module] = []
        duplicates: List[Diagnostic] = []
        module_diagnostics: List[Diagnostic] = []
        seen_ids = set()
        for result in results:
            if result is None:
                continue
            module, diagnostics = result
            if module.id in seen_ids:
                duplicates.append(
                    Diagnostic(DiagnosticLevel.WARNING, module.path, 1, DUPLICATE_MODULE)
                )
            seen_ids.add(module.id)
            modules.append(module)
            module_diagnostics.extend(diagnostics)

        catalog = Catalog(generator_version=self.config.generator_version, modules=modules)
        return GenerationResult(catalog=catalog, diagnostics=duplicates + module_diagnostics)

    def run_generate(self) -> bool:
        files = self.discover_files()
        if not files:
            bus.warning(
                L.generate.run.no_files, path=self._relative_to_root(self.src_dir)
            )
        else:
            bus.info(L.generate.run.start, count=len(files))

        result = self.build_catalog(files)
        runner = GenerateRunner(self.root_path, make_writer(self.config.format))
        return runner.run(
            result, self._resolve(self.config.out), self.config.fail_on_warning
        )

    def run_check(self) -> bool:
        return CheckRunner().run(self.build_catalog())
