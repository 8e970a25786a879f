from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple

class AllocationError(Exception):
    pass

class InsufficientMemory(AllocationError):
    def __init__(self, size: int):
        super().__init__(f'no free gap of {size} bytes')
        self.size = size

class NotFound(AllocationError, LookupError):
    def __init__(self, owner: str):
        super().__init__(f'no region owned by {owner!r}')
        self.owner = owner

class InvalidSize(AllocationError, ValueError):
    def __init__(self, size):
        super().__init__(f'size must be a positive integer, got {size!r}')
        self.size = size


@dataclass(eq=False)
class Region:
    owner: str
    size: int
    start: int = 0

    @property
    def end(self) -> int:
        return self.start + self.size - 1


class InsertionPoint(NamedTuple):
    index: int
    start: int


class Span(NamedTuple):
    start: int
    end: int
    owner: Optional[str]  # None for free space

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def is_free(self) -> bool:
        return self.owner is None


class AllocationTable:
    """Best-fit linear allocator over the addresses [0, capacity-1].

    Regions are kept in a list ordered by ascending start. Gaps are never
    stored; they are the spaces between neighbouring regions.
    """
    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f'capacity must be >= 1, got {capacity}')
        self.capacity = capacity
        self._regions: List[Region] = []

    def __len__(self) -> int:
        return len(self._regions)

    @property
    def regions(self) -> Tuple[Region, ...]:
        """Live regions in address order. Treat them as read-only; only the
        table may move or resize a region."""
        return tuple(self._regions)

    def used(self) -> int:
        return sum(r.size for r in self._regions)

    def free_bytes(self) -> int:
        return self.capacity - self.used()

    def _gaps(self) -> Iterator[Tuple[int, int, int]]:
        # (insertion index, first free byte, gap size), lowest address first.
        # Sentinels at -1 and capacity bound the first and last gap.
        prev_end = -1
        for i, r in enumerate(self._regions):
            yield i, prev_end + 1, r.start - prev_end - 1
            prev_end = r.end
        yield len(self._regions), prev_end + 1, self.capacity - prev_end - 1

    def find_best_fit(self, size: int) -> Optional[InsertionPoint]:
        best: Optional[InsertionPoint] = None
        best_left = None
        for index, start, gap in self._gaps():
            if gap < size:
                continue
            # strict '<' keeps the lowest-address gap on ties
            if best_left is None or gap - size < best_left:
                best = InsertionPoint(index, start)
                best_left = gap - size
        return best

    def allocate(self, owner: str, size: int) -> Region:
        if not owner:
            raise ValueError('owner must be a non-empty name')
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidSize(size)
        point = self.find_best_fit(size)
        if point is None:
            raise InsufficientMemory(size)
        region = Region(owner, size, point.start)
        self._regions.insert(point.index, region)
        return region

    def release(self, owner: str) -> int:
        for i, r in enumerate(self._regions):
            if r.owner == owner:
                del self._regions[i]
                return r.size
        raise NotFound(owner)

    def compact(self) -> int:
        """Slide every region down to byte 0, keeping order. Returns bytes moved."""
        moved = 0
        cursor = 0
        for r in self._regions:
            if r.start != cursor:
                moved += r.size
                r.start = cursor
            cursor += r.size
        return moved

    def report(self) -> List[Span]:
        spans = []
        cursor = 0
        for r in self._regions:
            if r.start > cursor:
                spans.append(Span(cursor, r.start - 1, None))
            spans.append(Span(r.start, r.end, r.owner))
            cursor = r.end + 1
        if cursor < self.capacity:
            spans.append(Span(cursor, self.capacity - 1, None))
        return spans

    def free_spans(self) -> List[Tuple[int, int]]:
        return [(s.start, s.size) for s in self.report() if s.is_free]
