from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Union

from memory.allocator import InvalidSize

BEST_FIT = 'B'
MIN_CAPACITY = 1048576  # 1MB


class CommandError(Exception):
    pass

class MalformedCommand(CommandError):
    pass

class InvalidStrategy(CommandError):
    def __init__(self, strategy: str):
        super().__init__(f'unsupported allocation strategy {strategy!r}')
        self.strategy = strategy

class InvalidStartupArgument(CommandError):
    pass


@dataclass(frozen=True)
class Request:
    name: str
    size: int
    strategy: str = BEST_FIT
    # size as typed, echoed back in warnings
    size_text: str = field(default='', compare=False)

@dataclass(frozen=True)
class Release:
    name: str

@dataclass(frozen=True)
class Status:
    pass

@dataclass(frozen=True)
class Compact:
    pass

@dataclass(frozen=True)
class Quit:
    pass

@dataclass(frozen=True)
class Help:
    pass

Command = Union[Request, Release, Status, Compact, Quit, Help]

_INTEGER = re.compile(r'[+-]?[0-9]+')

_NO_ARGS = {'STAT': Status, 'C': Compact, 'QUIT': Quit, 'HELP': Help}


def parse_size(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise InvalidSize(text)
    size = int(text)
    if size <= 0:
        raise InvalidSize(size)
    return size


def parse_command(line: str) -> Command:
    """Parse one space/tab separated command line.

    Keywords are case sensitive. Tokens past the ones a command needs are
    ignored, so 'STAT now' is still a STAT.
    """
    tokens = line.split()
    if not tokens:
        raise MalformedCommand('empty command')
    keyword = tokens[0]

    if keyword in _NO_ARGS:
        return _NO_ARGS[keyword]()

    if keyword == 'RL':
        if len(tokens) < 2:
            raise MalformedCommand('RL needs a process name')
        return Release(tokens[1])

    if keyword == 'RQ':
        if len(tokens) < 3:
            raise MalformedCommand('RQ needs a process name and a size')
        strategy = tokens[3] if len(tokens) > 3 else ''
        if strategy != BEST_FIT:
            raise InvalidStrategy(strategy)
        return Request(tokens[1], parse_size(tokens[2]), strategy, tokens[2])

    raise MalformedCommand(f'unknown command {keyword!r}')


def parse_capacity(arg) -> int:
    """Capacity from the startup argument, raised to MIN_CAPACITY if lower."""
    if arg is None:
        raise InvalidStartupArgument('Integer argument required')
    text = str(arg).strip()
    if not _INTEGER.fullmatch(text):
        raise InvalidStartupArgument(f'not an integer: {arg!r}')
    value = int(text)
    return max(value, MIN_CAPACITY)
