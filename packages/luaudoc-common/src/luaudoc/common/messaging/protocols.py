from typing import Protocol

# Levels a terminal renderer sends to stderr rather than stdout.
STDERR_LEVELS = ("warning", "error")


class Renderer(Protocol):
    """
    Presents a fully formatted bus message. Renderers never see pointers or
    templates, only the final text and one of "debug", "info", "success",
    "warning" or "error".
    """

    def render(self, message: str, level: str) -> None: ...
