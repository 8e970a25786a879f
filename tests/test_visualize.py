import numpy as np

from memory.allocator import AllocationTable
from tools.visualize_fragmentation import render_state, replay


def test_render_state_bins():
    table = AllocationTable(100)
    table.allocate('a', 25)
    table.allocate('b', 25)
    table.release('a')
    assert render_state(table, 4).tolist() == [0.0, 1.0, 0.0, 0.0]


def test_replay_marks_compaction_and_skips_rejections():
    lines = ['RQ A 30 B', 'RQ B 30 B', 'RQ C 30 B', 'RL B', 'RQ D 500 B',
             'bogus', 'C', 'STAT', 'QUIT', 'RQ E 5 B']
    table = AllocationTable(100)
    frames, marks = replay(table, lines, width=10)
    # 'bogus' is dropped, everything after QUIT is ignored
    assert len(frames) == 7
    assert marks == [5]
    assert [r.owner for r in table.regions] == ['A', 'C']
    assert np.array_equal(frames[-1], np.array([1] * 6 + [0] * 4, dtype=np.float32))
