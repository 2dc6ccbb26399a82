from pathlib import Path
from typing import Optional

import typer

from luaudoc.cli.factories import make_app


def generate_command(
    root: Optional[Path] = typer.Option(
        None, "--root", help="Project root. Defaults to the current directory."
    ),
    src: Optional[str] = typer.Option(
        None, "--src", help="Source directory, relative to the root."
    ),
    types: Optional[str] = typer.Option(
        None, "--types", help="Additional directory of type definition sources."
    ),
    out: Optional[str] = typer.Option(None, "--out", help="Catalog output path."),
    format: Optional[str] = typer.Option(
        None, "--format", help="Catalog format: json or yaml."
    ),
    types_file: Optional[str] = typer.Option(
        None, "--types-file", help="YAML sidecar of inferred types."
    ),
    generator_version: Optional[str] = typer.Option(
        None, "--generator-version", help="Version recorded in the catalog."
    ),
    fail_on_warning: bool = typer.Option(
        False, "--fail-on-warning", help="Exit non-zero if any diagnostic is reported."
    ),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", "-j", help="Number of modules processed in parallel."
    ),
):
    app_instance = make_app(
        root,
        src_dir=src,
        types_dir=types,
        out=out,
        format=format,
        types_file=types_file,
        generator_version=generator_version,
        fail_on_warning=True if fail_on_warning else None,
        jobs=jobs,
    )
    success = app_instance.run_generate()
    if not success:
        raise typer.Exit(code=1)
