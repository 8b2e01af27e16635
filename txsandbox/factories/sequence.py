import itertools

from txsandbox.core.config import settings


class Sequence:
    """
    Strictly increasing integer counter.

    Lives for the whole process: rolling back a test's transaction does not
    rewind it, so generated values stay unique across the run.
    """

    def __init__(self, start: int | None = None):
        self.start = settings.sequence_start if start is None else start
        self._counter = itertools.count(self.start)
        self._current: int | None = None

    @property
    def current(self) -> int | None:
        """Last value handed out, or None if the sequence was never drawn."""
        return self._current

    def next(self) -> int:
        self._current = next(self._counter)
        return self._current

    __next__ = next

    def __iter__(self):
        return self

    def __repr__(self):
        return f"<Sequence (start={self.start}, current={self._current})>"
