#!python
import argparse
import logging
import platform
import sys
import time
from typing import Dict, List, Optional

from . import __version__
from .config import CONFIG_SECTIONS, CustomHelpFormatter, add_section_arguments, load_config
from .constants import SUBCOMMAND
from .homology import main as homology_main
from .pairing import main as pairing_main
from .util import bash_expands, filepath, log_arguments, logger

VERSION = f'%(prog)s version {__version__}'

PAIRING_ARGUMENTS = [
    'max_gap',
    'min_overlap',
    'ignore_strand',
    'size_margin',
    'restrict_margin_to_size_multiple',
    'placeholder_name',
]


def _add_subcommand(subparsers, command: str, description: str):
    """
    Returns:
        the required and optional argument groups of the new subcommand parser
    """
    subparser = subparsers.add_parser(
        command, help=description, description=description, formatter_class=CustomHelpFormatter, add_help=False
    )
    required = subparser.add_argument_group('required arguments')
    optional = subparser.add_argument_group('optional arguments')
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v', '--version', action='version', version=VERSION, help='print the version and exit'
    )
    optional.add_argument('--log', default=None, help='write the log messages to this file instead of stderr')
    optional.add_argument(
        '--log_level', choices=['INFO', 'DEBUG'], default='INFO', help='lowest level of log message'
    )
    optional.add_argument(
        '-c', '--config', type=filepath, default=None, help='JSON file of <section>.<name> settings'
    )
    required.add_argument('-o', '--output', required=True, metavar='FILEPATH', help='path to the output file')
    return required, optional


def _add_call_sets(required):
    required.add_argument('-q', '--query', type=filepath, required=True, help='the query breakpoints (BEDPE)')
    required.add_argument('-s', '--subject', type=filepath, required=True, help='the subject breakpoints (BEDPE)')


def create_parser(argv):
    parser = argparse.ArgumentParser(formatter_class=CustomHelpFormatter)
    parser.add_argument(
        '-v', '--version', action='version', version=VERSION, help='print the version and exit'
    )
    subparsers = parser.add_subparsers(dest='command', help='the comparison to run')
    subparsers.required = True

    required, optional = _add_subcommand(
        subparsers, SUBCOMMAND.OVERLAP, 'list the subject breakpoints matching each query breakpoint'
    )
    _add_call_sets(required)
    add_section_arguments(optional, 'pairing', PAIRING_ARGUMENTS)

    required, optional = _add_subcommand(
        subparsers, SUBCOMMAND.COUNT, 'count the subject breakpoints matching each query breakend'
    )
    _add_call_sets(required)
    add_section_arguments(optional, 'pairing')

    required, optional = _add_subcommand(
        subparsers, SUBCOMMAND.HOMOLOGY, 'score the reference sequence homology at each breakpoint'
    )
    required.add_argument('-n', '--inputs', type=filepath, required=True, help='the breakpoints (BEDPE)')
    required.add_argument(
        '-r',
        '--reference_genome',
        nargs='+',
        required=True,
        metavar='FILEPATH',
        help='the reference genome fasta file(s)',
    )
    add_section_arguments(optional, 'homology')
    add_section_arguments(optional, 'pairing', ['placeholder_name'])

    return parser, parser.parse_args(argv)


def command_line_settings(args) -> Dict:
    """
    the settings given on the command line as flattened config keys
    """
    given = vars(args)
    return {
        f'{section}.{name}': given[name]
        for section, defaults in CONFIG_SECTIONS.items()
        for name in defaults.keys()
        if name in given
    }


def run_time(start_time: int) -> str:
    """
    Example:
        >>> run_time(int(time.time()) - 3725)
        '1:02:05'
    """
    hours, remainder = divmod(int(time.time()) - start_time, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f'{hours}:{minutes:02d}:{seconds:02d}'


def main(argv: Optional[List[str]] = None):
    """
    parse the command line, load the configuration and run the requested comparison

    Args:
        argv: the command line arguments, defaults to sys.argv
    """
    if argv is None:  # resolved here so that patched sys.argv is used in tests
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    # the root handlers are swapped for the run and restored afterwards
    saved_handlers = logging.root.handlers[:]
    for handler in saved_handlers:
        logging.root.removeHandler(handler)
    logging.basicConfig(
        format='{asctime} [{levelname}] {message}', style='{', level=args.log_level, filename=args.log
    )

    try:
        logger.info(f'svcompare: {__version__}')
        logger.info(f'hostname: {platform.node()}')
        log_arguments(args)

        if args.command == SUBCOMMAND.HOMOLOGY:
            try:
                args.reference_genome = bash_expands(*args.reference_genome)
            except FileNotFoundError:
                parser.error(f'--reference_genome file(s) {args.reference_genome} do not exist')

        config = load_config(args.config, command_line_settings(args))

        if args.command == SUBCOMMAND.HOMOLOGY:
            homology_main.main(
                inputs=args.inputs,
                reference_genome=args.reference_genome,
                output=args.output,
                config=config,
            )
        else:
            pairing_main.main(
                query=args.query,
                subject=args.subject,
                output=args.output,
                config=config,
                command=args.command,
            )
        logger.info(f'run time (hh:mm:ss): {run_time(start_time)}')
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
