"""
Linear Allocator — Visualizer

Replays a command script (one RQ/RL/C/STAT line per row) against an
allocation table and writes a Matplotlib heatmap of memory occupancy over
time. Compaction events are marked as horizontal lines.

How to run (recommended, from repo root):
    python -m tools.visualize_fragmentation --script scripts/fragmentation_stressor.txt --out out_fragmentation.png

Notes:
- Rejected commands (bad syntax, not enough memory, unknown process) are
  skipped; the picture only shows what the table accepted.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_fragmentation already works without this,
#  but this makes `python tools/visualize_fragmentation.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from memory.allocator import AllocationError, AllocationTable
from memory.fragmentation import compute_metrics
from shell.commands import MIN_CAPACITY, CommandError, Compact, Quit, Release, Request, parse_command


def load_script(path: str):
    """Yield non-blank command lines from a script file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield line


def render_state(table: AllocationTable, width: int) -> np.ndarray:
    """
    Return a 1D occupancy array over the address space, binned to 'width'.
    A bin is 1.0 when any byte in it is allocated.
    """
    scale = table.capacity / width
    bins = np.zeros(width, dtype=np.float32)
    for r in table.regions:
        a = int(r.start / scale)
        b = int(r.end / scale)
        a = max(0, min(width - 1, a))
        b = max(0, min(width - 1, b))
        bins[a : b + 1] = 1.0
    return bins


def replay(table: AllocationTable, lines, width: int, every: int = 1):
    """Apply each command to the table. Returns (frames, compaction frame indices)."""
    frames: list[np.ndarray] = []
    compact_marks: list[int] = []

    for i, line in enumerate(lines, start=1):
        try:
            cmd = parse_command(line)
        except (CommandError, AllocationError):
            continue

        if isinstance(cmd, Quit):
            break
        try:
            if isinstance(cmd, Request):
                table.allocate(cmd.name, cmd.size)
            elif isinstance(cmd, Release):
                table.release(cmd.name)
            elif isinstance(cmd, Compact):
                table.compact()
                compact_marks.append(len(frames))
        except AllocationError:
            pass

        if every <= 1 or (i % every == 0):
            frames.append(render_state(table, width))

    return frames, compact_marks


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--script", required=True, help="Path to a command script")
    ap.add_argument("--out", default="out_fragmentation.png", help="Output image file")
    ap.add_argument("--capacity", type=int, default=MIN_CAPACITY, help="Memory capacity (bytes)")
    ap.add_argument("--width", type=int, default=140, help="Heatmap width (bins)")
    ap.add_argument("--every", type=int, default=1, help="Record every N commands")
    args = ap.parse_args()

    script_path = Path(args.script)
    if not script_path.exists():
        raise SystemExit(f"Script not found: {script_path}")

    table = AllocationTable(args.capacity)
    frames, compact_marks = replay(table, load_script(str(script_path)), args.width, args.every)

    if not frames:
        raise SystemExit("No frames captured. Check script path and --every.")

    H = np.stack(frames, axis=0)  # (time, width)

    fig = plt.figure(figsize=(10.5, 4.6))
    ax = fig.add_subplot(111)
    ax.imshow(H, aspect="auto", interpolation="nearest")
    ax.set_title("Memory Occupancy Heatmap (Script-driven)")
    ax.set_xlabel("address (binned)")
    ax.set_ylabel("time (frames)")

    for t in compact_marks:
        ax.axhline(t, linewidth=1)

    m = compute_metrics(table)
    caption = (
        f"Final fragmentation: LFE={m.lfe}, holes={m.hole_count}, "
        f"external_frag={m.external_frag:.3f}, entropy={m.entropy:.3f}"
    )
    fig.text(0.01, 0.01, caption, fontsize=9)

    fig.tight_layout()
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
