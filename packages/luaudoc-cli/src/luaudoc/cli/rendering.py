import typer

from luaudoc.common.messaging.protocols import STDERR_LEVELS, Renderer

LEVEL_COLORS = {
    "success": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "error": typer.colors.RED,
    "debug": typer.colors.BRIGHT_BLACK,
}


class CliRenderer(Renderer):
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str):
        if level == "debug" and not self.verbose:
            return
        typer.secho(message, fg=LEVEL_COLORS.get(level), err=level in STDERR_LEVELS)
