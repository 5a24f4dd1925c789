#!/usr/bin/env python3
"""
asroute - summarize the autonomous systems a traceroute passes through

Usage examples:
  traceroute -a example.com | asroute
  lft example.com | asroute --verbose
  traceroute -a example.com | asroute --resolver ripestat
"""

import argparse
import signal
import sys
from pathlib import Path

from asroute import __version__
from asroute.pipeline.annotator import HopAnnotator
from asroute.resolvers import ResolverAdapter, create_resolver
from asroute.utils.config import RESOLVER_BACKENDS, get_config_manager
from asroute.utils.error_handling import (
    ConfigurationError, ParameterValidator, handle_errors
)
from asroute.utils.exit_codes import ASRouteExitCodes
from asroute.utils.logging import get_logger, setup_logging


def signal_handler(signum, frame):
    """Exit with the standard Unix status for the signal"""
    sys.exit(ASRouteExitCodes.SIGNAL_BASE + signum)


def setup_app_logging(config_manager, verbose: bool = False):
    """Configure logging for the application"""
    level = 'DEBUG' if verbose else None
    setup_logging(config_manager, level=level, console_colors=True)


@handle_errors('asroute.annotate')
def cmd_annotate(args, config_manager, input_stream, output_stream):
    """Annotate trace output read from input_stream"""
    logger = get_logger('asroute.annotate')

    if args.timeout is not None:
        ParameterValidator.validate_timeout(args.timeout, "timeout")
    config_manager.update_resolver_config(backend=args.resolver, timeout=args.timeout)

    issues = config_manager.validate_config()
    if issues:
        raise ConfigurationError(
            "; ".join(issues),
            guidance="Check the asroute config file and ASROUTE_* environment variables",
        )

    resolver_config = config_manager.get_config().resolver
    resolver = create_resolver(resolver_config)
    logger.debug(f"Using {resolver_config.backend} resolver (timeout {resolver_config.timeout}s)")

    annotator = HopAnnotator(ResolverAdapter(resolver), output_stream)
    annotator.run(input_stream)
    return ASRouteExitCodes.SUCCESS


def create_parser():
    """Create and configure argument parser"""
    parser = argparse.ArgumentParser(
        prog='asroute',
        description='asroute parses traceroute or lft output to show a summary of the ASes traversed',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument('--version', action='version', version=f'asroute {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Report skipped lines and failed lookups on stderr')
    parser.add_argument('--resolver', choices=RESOLVER_BACKENDS, default=None,
                        help='AS name service to query (default: cymru)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Per-lookup network timeout in seconds (default: 10)')
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to a JSON configuration file')

    return parser


def main(argv=None, input_stream=None, output_stream=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    signal.signal(signal.SIGTERM, signal_handler)

    config_manager = get_config_manager(args.config)
    setup_app_logging(config_manager, args.verbose)

    return cmd_annotate(
        args,
        config_manager,
        input_stream if input_stream is not None else sys.stdin,
        output_stream if output_stream is not None else sys.stdout,
    )


if __name__ == '__main__':
    sys.exit(main())
