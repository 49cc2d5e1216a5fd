from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

P = TypeVar("P")


@dataclass
class Event(Generic[P]):
    """Message handed to every listener of a single dispatch pass.

    Attributes:
        topic: Name of the topic that was triggered.
        params: Payload of the topic's declared shape, or None.
        caller: Object that raised the event (usually the collection).
        is_stopped: Set by stop(); no further listeners run once True.
    """

    topic: str
    params: Optional[P] = None
    caller: Any = None
    is_stopped: bool = False

    def stop(self) -> None:
        """Stop propagation to the remaining listeners of this pass."""
        self.is_stopped = True
