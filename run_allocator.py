from __future__ import annotations
import argparse, logging, os, sys
from memory.allocator import AllocationTable
from memory.fragmentation import compute_metrics
from shell.commands import InvalidStartupArgument, parse_capacity
from shell.console import AllocatorConsole, USAGE
from viz.ascii_map import render_map

LOGGER = logging.getLogger('allocator')


def configure_logging():
    level = os.environ.get('LOGLEVEL', 'WARNING').upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format='%(message)s')


def build_parser() -> argparse.ArgumentParser:
    ap=argparse.ArgumentParser(add_help=False,
                               description='Best-fit linear memory allocator simulator')
    ap.add_argument('capacity', nargs='?',
                    help='number of bytes of memory; values below 1048576 are raised to it')
    ap.add_argument('-help', '--help', '-h', dest='help', action='store_true')
    ap.add_argument('--script', help='read commands from this file instead of stdin')
    ap.add_argument('--echo', action='store_true',
                    help='echo each command after the prompt (useful with --script)')
    ap.add_argument('--show-map', action='store_true',
                    help='print a fragmentation summary and memory map on exit')
    ap.add_argument('--map-width', type=int, default=80)
    return ap


def print_summary(table: AllocationTable, map_width: int):
    m=compute_metrics(table)
    print("="*72)
    print("Linear Allocator — Summary")
    print("="*72)
    print(f"Capacity: {table.capacity}  Used: {table.used()}  Free: {table.free_bytes()}  Regions: {len(table)}")
    print(f"Fragmentation: LFE={m.lfe} holes={m.hole_count} external_frag={m.external_frag:.3f} entropy={m.entropy:.3f}")
    print(f"Compaction would grow the largest hole by {m.compaction_gain} bytes")
    print("-"*72)
    print("Memory map (ASCII):")
    print(render_map(table, map_width))
    print("="*72)


def main(argv=None) -> int:
    configure_logging()
    args=build_parser().parse_args(argv)

    if args.help:
        print("\n\t** Here is some helpful information **\n" + USAGE)
        return 1
    try:
        capacity = parse_capacity(args.capacity)
    except InvalidStartupArgument as e:
        LOGGER.debug('bad startup argument: %s', e)
        if args.capacity is None:
            print("\n\t** ERROR: Integer argument required. See usage. **\n" + USAGE)
        else:
            print("\nERROR: Argument must be an integer or -help. Low values default to 1048576, or 1MB\n" + USAGE)
        return 1

    table=AllocationTable(capacity)
    LOGGER.info('memory range [0 : %d]', capacity - 1)

    if args.script:
        with open(args.script, 'r', encoding='utf-8') as f:
            AllocatorConsole(table, stdin=f, echo=args.echo).run()
    else:
        AllocatorConsole(table, echo=args.echo).run()

    if args.show_map:
        print_summary(table, args.map_width)
    return 0


if __name__=='__main__':
    sys.exit(main())
