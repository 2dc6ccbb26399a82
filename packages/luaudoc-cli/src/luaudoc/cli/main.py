import typer

from luaudoc.common import bus
from luaudoc.needle import L, needle
from .rendering import CliRenderer

from .commands.check import check_command
from .commands.generate import generate_command

app = typer.Typer(
    name="luaudoc",
    help=needle.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root; it decides which renderer to use.
    bus.set_renderer(CliRenderer(verbose=verbose))


app.command(name="generate", help=needle.get(L.cli.command.generate.help))(
    generate_command
)
app.command(name="check", help=needle.get(L.cli.command.check.help))(check_command)


if __name__ == "__main__":
    app()
