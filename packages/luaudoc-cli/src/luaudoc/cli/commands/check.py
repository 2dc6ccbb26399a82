from pathlib import Path
from typing import Optional

import typer

from luaudoc.cli.factories import make_app


def check_command(
    root: Optional[Path] = typer.Option(
        None, "--root", help="Project root. Defaults to the current directory."
    ),
    src: Optional[str] = typer.Option(
        None, "--src", help="Source directory, relative to the root."
    ),
    types: Optional[str] = typer.Option(
        None, "--types", help="Additional directory of type definition sources."
    ),
    types_file: Optional[str] = typer.Option(
        None, "--types-file", help="YAML sidecar of inferred types."
    ),
):
    app_instance = make_app(root, src_dir=src, types_dir=types, types_file=types_file)
    success = app_instance.run_check()
    if not success:
        raise typer.Exit(code=1)
