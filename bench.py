from __future__ import annotations
import subprocess
import sys
import re
from pathlib import Path

PY = sys.executable  # respects venv if activated, otherwise uses current python

SCRIPTS = [
    ("best_fit_demo", 1048576),
    ("duplicate_names", 1048576),
    ("fragmentation_stressor", 1048576),
    ("compaction_recovery", 1048576),
]

PATTERNS = {
    "used": re.compile(r"Used:\s+(\d+)"),
    "free": re.compile(r"Free:\s+(\d+)"),
    "regions": re.compile(r"Regions:\s+(\d+)"),
    "lfe": re.compile(r"Fragmentation: LFE=(\d+)"),
    "holes": re.compile(r"holes=(\d+)"),
    "external_frag": re.compile(r"external_frag=([0-9\.]+)"),
    "entropy": re.compile(r"entropy=([0-9\.]+)"),
}

REJECTED = re.compile(r"not enough memory|does not exist|Invalid|rejected")

def run(script: str, capacity: int) -> str:
    path = str(Path("scripts") / f"{script}.txt")
    cmd = [PY, "run_allocator.py", str(capacity), "--script", path, "--show-map"]
    return subprocess.check_output(cmd, stderr=subprocess.STDOUT, text=True)

def parse(out: str):
    def get(key, default=None):
        m = PATTERNS[key].search(out)
        return m.group(1) if m else default
    return {
        "used": int(get("used", 0)),
        "free": int(get("free", 0)),
        "regions": int(get("regions", 0)),
        "lfe": int(get("lfe", 0)),
        "holes": int(get("holes", 0)),
        "external_frag": float(get("external_frag", 0.0)),
        "entropy": float(get("entropy", 0.0)),
        "rejected": len(REJECTED.findall(out)),
    }

def main():
    rows=[]
    for script, capacity in SCRIPTS:
        rows.append((script, parse(run(script, capacity))))

    header = ["script","regions","used","free","LFE","holes","ext_frag","entropy","rejected"]
    print("="*104)
    print("Linear Allocator — Fragmentation Table (bundled scripts)")
    print("="*104)
    print("{:<24} {:>7} {:>9} {:>9} {:>9} {:>6} {:>8} {:>8} {:>8}".format(*header))
    for script, m in rows:
        print("{:<24} {:>7} {:>9} {:>9} {:>9} {:>6} {:>8.3f} {:>8.3f} {:>8}".format(
            script, m["regions"], m["used"], m["free"], m["lfe"], m["holes"],
            m["external_frag"], m["entropy"], m["rejected"]
        ))
    print("="*104)
    print("Tip: plot occupancy over time for any script with the visualizer.")
    print("  python -m tools.visualize_fragmentation --script scripts/fragmentation_stressor.txt")

if __name__ == "__main__":
    main()
