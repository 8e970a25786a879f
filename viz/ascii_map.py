from __future__ import annotations
from memory.allocator import AllocationTable

def render_map(table: AllocationTable, width: int=80) -> str:
    cap=table.capacity
    buf=['.']*width
    for r in table.regions:
        s=(r.start*width)//cap
        e=((r.end+1)*width)//cap
        ch=r.owner[0].upper()
        for i in range(max(0,s), min(width, max(s+1,e))):
            buf[i]=ch
    return ''.join(buf)
