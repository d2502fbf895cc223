#!/usr/bin/env python3
"""
Name: cut
Description: select portions of each line of a file
Author: Rich Lafferty, rich@alcor.concordia.ca (Original Perl Author)
License: perl
"""

import sys
import os
import argparse
import csv
import io
import re
from enum import Enum

VERSION = '0.1.0'

NO_MODE_MESSAGE = "Must have --fields, --bytes, or --chars"

_DIGITS = re.compile(r'[0-9]+')


class ParseError(ValueError):
    """Base class for errors in a byte/character/field list."""


class EmptyListError(ParseError):
    def __init__(self):
        super().__init__("position lists cannot be empty")


class IllegalValueError(ParseError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f'illegal list value: "{value}"')


class InvertedRangeError(ParseError):
    def __init__(self, lower: int, upper: int):
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"First number in range ({lower}) must be lower than second number ({upper})"
        )


def _parse_endpoint(endpoint: str, part: str) -> int:
    """
    Validates one side of a list part and returns it as a 1-based number.
    `part` is what gets reported when the endpoint is not a number.
    """
    # int() is more lenient than the list syntax, so check by hand.
    if endpoint.startswith('+'):
        raise IllegalValueError(part)
    if not _DIGITS.fullmatch(endpoint):
        raise IllegalValueError(part)

    bound = int(endpoint)
    if bound == 0:
        raise IllegalValueError("0")
    return bound


def parse_positions(list_str: str) -> tuple:
    """
    Parses a cut-style list such as "1,3-5,15" into a tuple of half-open,
    0-based ranges. The parts keep the order they were given in; nothing
    is sorted, merged or deduplicated, so "3,1,1" selects position 3, then
    position 1 twice.

    Raises a ParseError subclass on the first bad part.
    """
    if not list_str:
        raise EmptyListError()

    positions = []
    for part in list_str.split(','):
        # No single part is to blame for "1,,2" or "1,", so report it all.
        if not part:
            raise IllegalValueError(list_str)

        endpoints = part.split('-')
        if len(endpoints) > 2:
            raise IllegalValueError(part)

        bounds = [_parse_endpoint(endpoint, part) for endpoint in endpoints]

        if len(bounds) == 1:
            lower = bounds[0]
            positions.append(range(lower - 1, lower))
        else:
            lower, upper = bounds
            if lower >= upper:
                raise InvertedRangeError(lower, upper)
            positions.append(range(lower - 1, upper))

    return tuple(positions)


def format_positions(positions) -> str:
    """Turns parsed positions back into the 1-based list notation."""
    parts = []
    for r in positions:
        if r.stop - r.start == 1:
            parts.append(str(r.stop))
        else:
            parts.append(f"{r.start + 1}-{r.stop}")
    return ",".join(parts)


def _select(items, positions) -> list:
    """
    Picks items by position, range after range. Indexes past the end are
    skipped rather than treated as errors.
    """
    count = len(items)
    selected = []
    for r in positions:
        # Only walk the part of the range that lands inside the input.
        for i in range(r.start, min(r.stop, count)):
            selected.append(items[i])
    return selected


def extract_bytes(line: str, positions) -> str:
    """
    Selects bytes of the UTF-8 encoded line. Cutting through the middle of
    a multi-byte character leaves invalid bytes behind; each such run is
    shown as U+FFFD instead of failing.
    """
    data = line.encode('utf-8')
    return bytes(_select(data, positions)).decode('utf-8', errors='replace')


def extract_chars(line: str, positions) -> str:
    return "".join(_select(line, positions))


def extract_fields(record, positions) -> list:
    """
    Selects fields from an already split record. The caller joins the
    result with whatever delimiter it split on.
    """
    return _select(record, positions)


class Mode(Enum):
    FIELDS = 'fields'
    BYTES = 'bytes'
    CHARS = 'chars'


class Selection:
    """Which unit a line is cut into, together with the positions to keep."""
    def __init__(self, mode: Mode, positions: tuple):
        self.mode = mode
        self.positions = positions

    def __eq__(self, other):
        if not isinstance(other, Selection):
            return NotImplemented
        return self.mode == other.mode and self.positions == other.positions

    def __repr__(self):
        return f"Selection({self.mode}, {format_positions(self.positions)!r})"


EXTRACTORS = {
    Mode.FIELDS: extract_fields,
    Mode.BYTES: extract_bytes,
    Mode.CHARS: extract_chars,
}


def extract(selection: Selection, unit):
    """
    Applies a selection to one line (bytes, chars) or one record (fields).
    Raises ValueError when no selection mode was chosen.
    """
    if selection is None or selection.mode not in EXTRACTORS:
        raise ValueError(NO_MODE_MESSAGE)
    return EXTRACTORS[selection.mode](unit, selection.positions)


def cut_lines(stream, selection: Selection):
    """
    Yields the cut of every line of the stream (byte or character mode).
    Lines end at a newline only; a carriage return right before it is
    dropped as well.
    """
    for line in stream:
        if line.endswith('\n'):
            line = line[:-1]
            if line.endswith('\r'):
                line = line[:-1]
        yield extract(selection, line)


def cut_records(stream, selection: Selection, delimiter: str):
    """
    Yields the cut of every delimited record of the stream (field mode).
    Quoted fields may contain the delimiter; the chosen fields are written
    back joined by the plain delimiter.
    """
    for record in csv.reader(stream, delimiter=delimiter):
        # csv gives an empty record for a blank line; there is nothing to cut.
        if not record:
            continue
        yield delimiter.join(extract(selection, record))


def open_input(filename: str, newline: str):
    """
    Opens a file for reading, with '-' meaning standard input. Both are read
    as UTF-8 and line endings are never translated. `newline` is passed
    on to the text layer: a newline character for line modes, so a bare
    carriage return stays inside its line, and an empty string for csv.
    """
    if filename == '-':
        if not hasattr(sys.stdin, 'buffer'):
            return sys.stdin
        return io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', newline=newline)
    return open(filename, 'r', encoding='utf-8', newline=newline)


def get_args(argv=None) -> argparse.Namespace:
    """
    Parses the command line. On top of the plain argparse values the
    namespace carries `selection`, the parsed mode and position list.
    Raises ValueError for a bad list, a bad delimiter or a missing mode.
    """
    parser = argparse.ArgumentParser(
        description="Select portions of each line of a file.",
        usage="%(prog)s [-b list | -c list | -f list] [-d delim] [file ...]"
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    # The three modes are mutually exclusive.
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument('-b', '--bytes', dest='byte_list', metavar='BYTES',
                            help='Selected bytes.')
    mode_group.add_argument('-c', '--chars', dest='char_list', metavar='CHARS',
                            help='Selected characters.')
    mode_group.add_argument('-f', '--fields', dest='field_list', metavar='FIELDS',
                            help='Selected fields.')

    parser.add_argument('-d', '--delim', dest='delimiter', default='\t',
                        help='Field delimiter (default: TAB).')
    parser.add_argument('files', nargs='*', metavar='FILE',
                        help="Input file(s). Use '-' for standard input (the default).")

    args = parser.parse_args(argv)

    if len(args.delimiter.encode('utf-8')) != 1:
        raise ValueError(f'--delim "{args.delimiter}" must be a single byte')

    # An empty list ('-b ""') still picks its mode, so test against None.
    if args.byte_list is not None:
        args.selection = Selection(Mode.BYTES, parse_positions(args.byte_list))
    elif args.char_list is not None:
        args.selection = Selection(Mode.CHARS, parse_positions(args.char_list))
    elif args.field_list is not None:
        args.selection = Selection(Mode.FIELDS, parse_positions(args.field_list))
    else:
        raise ValueError(NO_MODE_MESSAGE)

    if not args.files:
        args.files = ['-']
    return args


def run(args: argparse.Namespace) -> int:
    """
    Cuts every input file in turn and returns the exit status. A file that
    cannot be opened or read is reported and skipped.
    """
    program_name = os.path.basename(sys.argv[0])
    exit_status = 0

    for filename in args.files:
        stream = None
        try:
            if args.selection.mode is Mode.FIELDS:
                stream = open_input(filename, newline='')
                output = cut_records(stream, args.selection, args.delimiter)
            else:
                stream = open_input(filename, newline='\n')
                output = cut_lines(stream, args.selection)
            for text in output:
                print(text)
        except BrokenPipeError:
            # Output is gone, not the input file.
            raise
        except OSError as e:
            print(f"{program_name}: {filename}: {e.strerror}", file=sys.stderr)
            exit_status = 1
        except (UnicodeDecodeError, csv.Error) as e:
            print(f"{program_name}: {filename}: {e}", file=sys.stderr)
            exit_status = 1
        finally:
            if stream is not None and stream is not sys.stdin:
                if filename == '-':
                    # Leave the real stdin open for a later '-'.
                    stream.detach()
                else:
                    stream.close()

    return exit_status


def main(argv=None):
    """Parses arguments and cuts the named files."""
    program_name = os.path.basename(sys.argv[0])

    try:
        args = get_args(argv)
    except ValueError as e:
        print(f"{program_name}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        exit_status = run(args)
    except BrokenPipeError:
        # The reader went away (e.g. `cut -c 1 big.txt | head`); say nothing.
        sys.stderr.close()
        exit_status = 1

    sys.exit(exit_status)


if __name__ == "__main__":
    main()
