"""Monotonic id allocation owned by a single store."""


class IdAllocator:
    """Hands out increasing integer ids; never reuses one it has seen."""

    def __init__(self, start: int = 1):
        self._next = start

    @property
    def next_id(self) -> int:
        """The id the next allocation will return (not reserved)."""
        return self._next

    def allocate(self) -> int:
        value = self._next
        self._next += 1
        return value

    def observe(self, seen_id: int) -> None:
        """Advance past an id that came from elsewhere (a file, an import)."""
        if seen_id >= self._next:
            self._next = seen_id + 1
