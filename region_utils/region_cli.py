"""
region_cli.py - Command-line interface for building the US region lookup database
"""

import sys
import argparse

from region_utils.commands import cmd_info_sources, cmd_info_states, cmd_info_artifacts, cmd_build, cmd_lookup
from region_utils.config import BUILD_DIR_DEFAULT, CENSUS_BASE_URL, DOWNLOAD_TIMEOUT, SIMPLIFY_TOLERANCE
from region_utils.utils.logger import setup_logger


def build_parser():
    parser = argparse.ArgumentParser(
        description='Build a US ZIP/city/state bounds database and search index from Census shapefiles',
        epilog="""
Examples:
  # Show the shapefiles used and where they come from:
  region-utils info sources

  # Download (if needed) and build everything into ./build:
  region-utils build

  # Rebuild from shapefiles already on disk, fetching archives 3 at a time otherwise:
  region-utils build --no-download
  region-utils build --parallel 3

  # Check the four release files and look up a region:
  region-utils info artifacts
  region-utils lookup "beverly hills, ca"
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # Global arguments
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose (DEBUG) logging output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Enable quiet mode (WARNING and ERROR only)')
    parser.add_argument('--log-dir', type=str, default=None, help='Directory for build logs (default: ./logs)')
    parser.add_argument('--output', type=str, default=str(BUILD_DIR_DEFAULT), help='Build output directory (default: build)')
    parser.add_argument('--base-url', type=str, default=CENSUS_BASE_URL, help='Base URL of the shapefile archives')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ========== INFO COMMAND ==========
    info_parser = subparsers.add_parser('info', help='Information commands (sources, states, artifacts)')
    info_subparsers = info_parser.add_subparsers(dest='info_command', help='Info subcommands', required=True)

    sources_parser = info_subparsers.add_parser('sources', help='List the shapefiles in processing order')
    sources_parser.set_defaults(func=cmd_info_sources)

    states_parser = info_subparsers.add_parser('states', help='List state abbreviations and names')
    states_parser.set_defaults(func=cmd_info_states)

    artifacts_parser = info_subparsers.add_parser('artifacts', help='Check the release files in the build directory')
    artifacts_parser.set_defaults(func=cmd_info_artifacts)

    # ========== BUILD COMMAND ==========
    build_cmd_parser = subparsers.add_parser('build', help='Download shapefiles and build the region database')
    build_cmd_parser.set_defaults(func=cmd_build)
    build_cmd_parser.add_argument('--no-download', dest='download', action='store_false', default=True, help='Fail instead of downloading missing shapefiles')
    build_cmd_parser.add_argument('--parallel', type=int, default=1, help='Number of parallel archive downloads (default: 1)')
    build_cmd_parser.add_argument('--timeout', type=int, default=DOWNLOAD_TIMEOUT, help=f'Download timeout in seconds (default: {DOWNLOAD_TIMEOUT})')
    build_cmd_parser.add_argument('--tolerance', type=float, default=SIMPLIFY_TOLERANCE, help=f'State outline simplification tolerance in degrees (default: {SIMPLIFY_TOLERANCE})')

    # ========== LOOKUP COMMAND ==========
    lookup_parser = subparsers.add_parser('lookup', help='Look up a region by name in a built database')
    lookup_parser.set_defaults(func=cmd_lookup)
    lookup_parser.add_argument('name', help='Region name, e.g. "90210", "austin, tx" or "tx"')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging level (global)
    if args.quiet:
        level = 30
    elif args.verbose:
        level = 10
    else:
        level = 20
    setup_logger(log_dir=args.log_dir, level=level)

    # Check if a command was provided
    if not hasattr(args, 'func'):
        parser.print_help()
        return 0

    return args.func(args)


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
        sys.exit(130)


if __name__ == '__main__':
    run()
