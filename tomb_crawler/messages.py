"""Player-facing message log.

Narration ("orc attacks player for 3 hit points.") is appended here, newest
last, and a renderer shows the tail. The log is bounded: once full, adding a
message drops the oldest one.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Iterator, List

from tomb_crawler import colors
from tomb_crawler.types import Color


@dataclass(frozen=True)
class Message:
    text: str
    color: Color


class MessageLog:
    def __init__(self, capacity: int = 6, messages: Iterable[Message] = ()) -> None:
        if capacity <= 0:
            raise ValueError(f"Message log capacity must be positive: {capacity}")
        self._messages: Deque[Message] = deque(messages, maxlen=capacity)

    def add(self, text: str, color: Color = colors.WHITE) -> None:
        self._messages.append(Message(text, color))

    @property
    def capacity(self) -> int:
        assert self._messages.maxlen is not None
        return self._messages.maxlen

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def last(self) -> Message:
        return self._messages[-1]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
