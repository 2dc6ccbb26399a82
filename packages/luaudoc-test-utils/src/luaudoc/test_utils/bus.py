from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

import luaudoc.common
from luaudoc.needle import SemanticPointer


@dataclass
class CapturedMessage:
    level: str
    id: str
    params: Dict[str, Any]
    text: str


class SpyBus:
    """
    Spies on the global luaudoc.common.bus singleton.

    Modules hold the instance via `from luaudoc.common import bus`, so its
    `_render` hook is patched in place. Every intent is recorded with its
    pointer, parameters and the text the active catalog renders for it;
    nothing reaches a real renderer.
    """

    def __init__(self):
        self.messages: List[CapturedMessage] = []

    @contextmanager
    def patch(self, monkeypatch: Any) -> Iterator["SpyBus"]:
        real_bus = luaudoc.common.bus

        def intercept_render(
            level: str, msg_id: Union[str, SemanticPointer], /, **kwargs: Any
        ) -> None:
            self.messages.append(
                CapturedMessage(
                    level=level,
                    id=str(msg_id),
                    params=kwargs,
                    text=real_bus.format(msg_id, **kwargs),
                )
            )

        monkeypatch.setattr(real_bus, "_render", intercept_render)
        yield self

    def get_messages(self) -> List[CapturedMessage]:
        return list(self.messages)

    def messages_for(self, msg_id: SemanticPointer) -> List[CapturedMessage]:
        key = str(msg_id)
        return [m for m in self.messages if m.id == key]

    def texts(self, level: Optional[str] = None) -> List[str]:
        return [m.text for m in self.messages if level is None or m.level == level]

    def assert_id_called(self, msg_id: SemanticPointer, level: Optional[str] = None):
        if any(level is None or m.level == level for m in self.messages_for(msg_id)):
            return
        ids_seen = [m.id for m in self.messages]
        raise AssertionError(
            f"Message with ID '{msg_id}' was not sent.\nCaptured IDs: {ids_seen}"
        )

    def assert_id_not_called(self, msg_id: SemanticPointer):
        if self.messages_for(msg_id):
            raise AssertionError(f"Message with ID '{msg_id}' was sent unexpectedly.")
