import pytest

from memory.allocator import AllocationTable
from memory.fragmentation import compute_metrics
from viz.ascii_map import render_map


def test_metrics_without_free_space():
    table = AllocationTable(100)
    table.allocate('a', 100)
    m = compute_metrics(table)
    assert (m.total_free, m.lfe, m.hole_count) == (0, 0, 0)
    assert m.external_frag == 0.0
    assert m.entropy == 0.0
    assert m.compaction_gain == 0


def test_metrics_empty_table_is_one_hole():
    m = compute_metrics(AllocationTable(100))
    assert (m.total_free, m.lfe, m.hole_count) == (100, 100, 1)
    assert m.external_frag == 0.0
    assert m.entropy == pytest.approx(0.0)


def test_metrics_two_equal_holes():
    table = AllocationTable(200)
    for name in 'abcd':
        table.allocate(name, 50)
    table.release('a')
    table.release('c')
    m = compute_metrics(table)
    assert m.hole_count == 2
    assert m.external_frag == pytest.approx(0.5)
    assert m.entropy == pytest.approx(1.0)
    assert m.compaction_gain == 50


def test_metrics_ignore_owner_named_free():
    table = AllocationTable(1000)
    table.allocate('Free', 100)
    m = compute_metrics(table)
    assert (m.total_free, m.lfe, m.hole_count) == (900, 900, 1)
    assert m.external_frag == 0.0


def test_compaction_removes_external_fragmentation():
    table = AllocationTable(1000)
    for name in 'abcde':
        table.allocate(name, 100)
    table.release('b')
    table.release('d')
    before = compute_metrics(table)
    assert before.hole_count == 3
    assert before.external_frag > 0
    assert before.compaction_gain == 200
    table.compact()
    after = compute_metrics(table)
    assert (after.hole_count, after.lfe, after.external_frag) == (1, 700, 0.0)


def test_render_map():
    table = AllocationTable(100)
    table.allocate('alpha', 50)
    table.allocate('beta', 25)
    table.release('alpha')
    assert render_map(table, width=4) == '..B.'
    assert render_map(AllocationTable(100), width=10) == '.' * 10


def test_render_map_tiny_region_still_visible():
    table = AllocationTable(1000)
    table.allocate('x', 1)
    assert render_map(table, width=10) == 'X' + '.' * 9
