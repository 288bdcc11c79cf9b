"""Index-stable arena of live bodies.

Bodies live in a dense list of slots. A handle is the slot index plus the
slot's generation, so a handle kept past ``unregister`` can never alias the
body that later reuses the slot.

Iteration visits live bodies in slot order. Pairwise summation is
commutative, but floating-point rounding is not: two registries holding the
same bodies in a different slot order can produce results that differ in the
last bits. Bit-exact reproducibility is only promised for identical
registration histories.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from gravity_lace.exceptions import DuplicateBodyError, StaleHandleError
from gravity_lace.physics.body import Body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyHandle:
    """Stable reference to a registered body."""
    index: int
    generation: int


class BodyRegistry:
    """Ordered collection of live Body references with recycled slots."""

    def __init__(self):
        self._slots: List[Optional[Body]] = []
        self._generations: List[int] = []
        self._free: List[int] = []
        self._count = 0

    def register(self, body: Body) -> BodyHandle:
        """Add a body and return its handle.

        Raises:
            DuplicateBodyError: If the body is already registered somewhere
        """
        if body.handle is not None:
            raise DuplicateBodyError(f"{body!r} is already registered as {body.handle}")

        if self._free:
            index = self._free.pop()
            self._generations[index] += 1
            self._slots[index] = body
        else:
            index = len(self._slots)
            self._slots.append(body)
            self._generations.append(0)

        handle = BodyHandle(index, self._generations[index])
        body.handle = handle
        self._count += 1
        logger.debug("Registered %r in slot %d", body, index)
        return handle

    def unregister(self, handle: BodyHandle) -> Body:
        """Remove the body behind handle and free its slot.

        Raises:
            StaleHandleError: If handle does not refer to a live body
        """
        body = self.get(handle)
        self._slots[handle.index] = None
        self._free.append(handle.index)
        self._count -= 1
        body.handle = None
        logger.debug("Unregistered %r from slot %d", body, handle.index)
        return body

    def get(self, handle: BodyHandle) -> Body:
        """Look up a live body.

        Raises:
            StaleHandleError: If handle does not refer to a live body
        """
        if not self._is_live(handle):
            raise StaleHandleError(handle)
        return self._slots[handle.index]

    def _is_live(self, handle) -> bool:
        if not isinstance(handle, BodyHandle):
            return False
        if handle.index < 0 or handle.index >= len(self._slots):
            return False
        return self._slots[handle.index] is not None and self._generations[handle.index] == handle.generation

    def __contains__(self, handle) -> bool:
        return self._is_live(handle)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Body]:
        for body in self._slots:
            if body is not None:
                yield body

    def bodies(self) -> List[Body]:
        """Snapshot of live bodies in slot order."""
        return [body for body in self._slots if body is not None]

    def handles(self) -> List[BodyHandle]:
        """Handles of live bodies in slot order."""
        return [
            BodyHandle(index, self._generations[index])
            for index, body in enumerate(self._slots)
            if body is not None
        ]

    def clear(self) -> None:
        """Unregister every body."""
        for handle in self.handles():
            self.unregister(handle)
