import time
from collections.abc import Callable


class DocumentIdGenerator:
    """Generates ids of the form ``doc_<epoch millis>``.

    The millisecond value never repeats within one generator: a create in the
    same tick (or after the clock steps back) is bumped past the last id issued.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        prefix: str = "doc_",
    ) -> None:
        self._clock = clock
        self._prefix = prefix
        self._last_millis = 0

    def next_id(self) -> str:
        millis = int(self._clock() * 1000)
        if millis <= self._last_millis:
            millis = self._last_millis + 1
        self._last_millis = millis
        return f"{self._prefix}{millis}"
