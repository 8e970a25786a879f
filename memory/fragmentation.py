from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math

from memory.allocator import AllocationTable, Span

@dataclass
class FragMetrics:
    """Shape of the free space in an allocation table.

    lfe is the largest free extent. external_frag is the share of free bytes
    outside it, so a single hole (or no free space) scores 0.0.
    """
    total_free: int
    lfe: int
    external_frag: float
    entropy: float
    hole_count: int

    @property
    def compaction_gain(self) -> int:
        # bytes a compaction would add to the largest hole
        return self.total_free - self.lfe

def _hole_entropy(holes: List[Span]) -> float:
    # bits; 0.0 for one hole, log2(n) for n equal holes
    total = sum(h.size for h in holes)
    if total <= 0:
        return 0.0
    return -sum((h.size/total) * math.log2(h.size/total) for h in holes)

def compute_metrics(table: AllocationTable) -> FragMetrics:
    holes = [s for s in table.report() if s.is_free]
    total_free = sum(h.size for h in holes)
    lfe = max((h.size for h in holes), default=0)
    external = 0.0 if total_free == 0 else 1.0 - lfe/total_free
    return FragMetrics(total_free, lfe, external, _hole_entropy(holes), len(holes))
