import io
from pathlib import Path

import pytest

import run_allocator
from shell.console import USAGE

SCRIPTS = Path(__file__).resolve().parents[1] / 'scripts'


def test_missing_argument_prints_usage(capsys):
    assert run_allocator.main([]) == 1
    out = capsys.readouterr().out
    assert 'Integer argument required' in out
    assert USAGE in out


def test_non_numeric_argument(capsys):
    assert run_allocator.main(['lots']) == 1
    out = capsys.readouterr().out
    assert 'Argument must be an integer or -help' in out


@pytest.mark.parametrize('flag', ['-help', '--help', '-h'])
def test_help_flag(flag, capsys):
    assert run_allocator.main([flag]) == 1
    assert 'Here is some helpful information' in capsys.readouterr().out


def test_small_capacity_is_raised_to_floor(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('STAT\nQUIT\n'))
    assert run_allocator.main(['1000']) == 0
    assert 'Address [       0 : 1048575 ] Free' in capsys.readouterr().out


def test_large_capacity_used_as_given(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('STAT\nQUIT\n'))
    assert run_allocator.main(['2097152']) == 0
    assert 'Address [       0 : 2097151 ] Free' in capsys.readouterr().out


def test_script_with_summary(capsys):
    script = str(SCRIPTS / 'compaction_recovery.txt')
    assert run_allocator.main(['1048576', '--script', script, '--show-map', '--map-width', '16']) == 0
    out = capsys.readouterr().out
    # the first 400000-byte request fails, the one after compaction fits
    assert out.count('There is not enough memory to load 400000 bytes') == 1
    assert 'Used: 800000  Free: 248576  Regions: 3' in out
    assert 'Fragmentation: LFE=248576 holes=1 external_frag=0.000' in out
    assert 'Compaction would grow the largest hole by 0 bytes' in out
    assert 'PPPPPPPPPPPP....' in out
    assert 'Allocator terminated' in out
