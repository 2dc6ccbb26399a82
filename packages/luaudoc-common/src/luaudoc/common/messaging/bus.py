import logging
from threading import Lock
from typing import Any, Optional, Union

from luaudoc.needle import Needle, SemanticPointer, needle
from .protocols import Renderer

log = logging.getLogger(__name__)

MessageId = Union[str, SemanticPointer]


class MessageBus:
    """
    Routes semantic message ids to the active renderer.

    Modules may be built on worker threads, so rendering is serialised.
    """

    def __init__(self, catalog: Optional[Needle] = None):
        self._catalog = catalog if catalog is not None else needle
        self._renderer: Optional[Renderer] = None
        self._lock = Lock()

    def set_renderer(self, renderer: Optional[Renderer]):
        self._renderer = renderer

    def format(self, msg_id: MessageId, **kwargs: Any) -> str:
        template = self._catalog.get(msg_id)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError) as e:
            log.debug("Template '%s' is missing argument %s", msg_id, e)
            return f"<formatting_error for '{msg_id}'>"

    def _render(self, level: str, msg_id: MessageId, /, **kwargs: Any) -> None:
        renderer = self._renderer
        if renderer is None:
            return

        message = self.format(msg_id, **kwargs)
        with self._lock:
            renderer.render(message, level)

    def debug(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: MessageId, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)
