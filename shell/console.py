from __future__ import annotations
import logging
import sys
from typing import List, TextIO

from memory.allocator import AllocationTable, InsufficientMemory, InvalidSize, NotFound, Span
from shell.commands import (
    BEST_FIT, MIN_CAPACITY, Compact, Help, InvalidStrategy, MalformedCommand,
    Quit, Release, Request, Status, parse_command,
)

LOGGER = logging.getLogger(__name__)

PROMPT = 'allocator> '
HINT = 'Enter HELP for more information.'

USAGE = f"""
    Linear memory allocator simulator. Memory starts at byte 0 and its last
    byte is the capacity given at startup minus 1. At the 'allocator>' prompt
    enter one space or tab separated command per line:

    RQ P3 1024 B    Request 1024 bytes for process P3 using best fit.
                    Rejected with a warning when no free gap is big enough.

    RL P3           Release the memory held by P3. When several processes
                    share the name, the one at the lowest address goes first.

    STAT            Print every address range with its owner, or Free.

    C               Compact memory, moving all free space to the high bytes.

    QUIT            Quit the program.

    HELP            Print this text. The program keeps running.

    Commands are case sensitive. '{BEST_FIT}' (best fit) is the only allocation
    strategy; any other value in the fourth field of RQ rejects the request.

    Startup:
        python run_allocator.py 1048576              1MB of memory
        python run_allocator.py 1048576 --script F   replay commands from file F
        python run_allocator.py -help                print this text

    The smallest capacity is {MIN_CAPACITY} (1MB); lower values are raised to it.
    Memory range: [ 0 : capacity - 1 ]
"""


def format_span(span: Span) -> str:
    tag = 'Free' if span.is_free else f'Process {span.owner}'
    return f'Address [ {span.start:7d} : {span.end:7d} ] {tag}'


def format_report(spans: List[Span]) -> str:
    return '\n' + ''.join(format_span(s) + '\n' for s in spans) + '\n'


class AllocatorConsole:
    def __init__(self, table: AllocationTable, stdin: TextIO=None, stdout: TextIO=None,
                 echo: bool=False):
        self.table = table
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.echo = echo
        self.done = False

    def write(self, text: str):
        self.stdout.write(text)
        self.stdout.flush()

    def say(self, text: str):
        self.write(text + '\n')

    def run(self):
        """Prompt and execute lines until QUIT or end of input."""
        while not self.done:
            self.write(PROMPT)
            line = self.stdin.readline()
            if not line:
                LOGGER.debug('end of input')
                self.write('\n')
                break
            if self.echo:
                self.write(line if line.endswith('\n') else line + '\n')
            self.execute(line)

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False once the loop should stop."""
        try:
            cmd = parse_command(line)
        except InvalidStrategy as e:
            LOGGER.debug('rejected %r: %s', line.strip(), e)
            self.say(f"Invalid Parameter for Allocation Strategy, '{BEST_FIT}' is only option. {HINT}")
            return True
        except InvalidSize as e:
            LOGGER.debug('rejected %r: %s', line.strip(), e)
            self.say(f'Request rejected, third parameter must be a positive integer. {HINT}')
            return True
        except MalformedCommand as e:
            LOGGER.debug('rejected %r: %s', line.strip(), e)
            self.say(f'Invalid Input. {HINT}')
            return True

        LOGGER.debug('command %s', cmd)
        if isinstance(cmd, Request):
            try:
                region = self.table.allocate(cmd.name, cmd.size)
            except InsufficientMemory:
                self.say(f'There is not enough memory to load {cmd.size_text or cmd.size} bytes. {HINT}')
            else:
                LOGGER.debug('allocated %s at [%d, %d]', region.owner, region.start, region.end)
        elif isinstance(cmd, Release):
            try:
                size = self.table.release(cmd.name)
            except NotFound:
                self.say(f'Process does not exist. {HINT}')
            else:
                LOGGER.debug('released %d bytes from %s', size, cmd.name)
        elif isinstance(cmd, Status):
            self.write(format_report(self.table.report()))
        elif isinstance(cmd, Compact):
            moved = self.table.compact()
            LOGGER.debug('compaction moved %d bytes', moved)
        elif isinstance(cmd, Help):
            self.write(USAGE)
        elif isinstance(cmd, Quit):
            self.say('\nAllocator terminated')
            self.done = True
        return not self.done
