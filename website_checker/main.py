"""
Command-line entry point for the website checker.
"""

import sys
import argparse
from typing import List, Optional

from config import ConfigManager, DEFAULT_CONFIG_PATH, DEFAULT_URLS_PATH
from website_checker.concurrent.controller import RunCoordinator
from website_checker.data.targets import load_urls
from website_checker.utils.errors import ConfigurationError, SinkWriteError
from website_checker.utils.logging import get_logger, setup_logging


logger = get_logger(__name__)


def create_cli_parser() -> argparse.ArgumentParser:
    """Create command-line interface parser."""
    parser = argparse.ArgumentParser(
        prog='website-checker',
        description='Website Checker - concurrent URL reachability checks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                              # Check urls.txt using config.json
  %(prog)s --config prod.json           # Use custom configuration file
  %(prog)s --urls sites.txt --quiet     # Only write the run log

A request_timeout_secs of 0 does not disable the timeout: every attempt
fails at once as a transport timeout.
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f'Path to configuration file (default: {DEFAULT_CONFIG_PATH})'
    )

    parser.add_argument(
        '--urls', '-u',
        type=str,
        default=DEFAULT_URLS_PATH,
        help=f'Path to target list, one URL per line (default: {DEFAULT_URLS_PATH})'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Do not print a console line per result'
    )

    # Logging options
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='INFO',
        help='Diagnostic log level (default: INFO)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output (equivalent to --log-level DEBUG)'
    )

    parser.add_argument(
        '--diagnostic-log',
        type=str,
        help='Also write diagnostic logs to this file (rotated daily)'
    )

    return parser


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, load inputs and execute one run.

    Returns:
        Process exit code
    """
    parser = create_cli_parser()
    args = parser.parse_args(argv)

    setup_logging(
        log_level='DEBUG' if args.verbose else args.log_level,
        log_file=args.diagnostic_log
    )

    try:
        config = ConfigManager(args.config).load_config()
        urls = load_urls(args.urls)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not urls:
        print(f"No URLs found in {args.urls}. Exiting.", file=sys.stderr)
        return 0

    coordinator = RunCoordinator(config, console=None if args.quiet else sys.stdout)

    try:
        report = coordinator.run(urls)
    except SinkWriteError as e:
        logger.error(f"Run log error: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    except BrokenPipeError:
        logger.error("Console output closed; run aborted")
        return 1
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        return 130

    logger.debug(f"Reach rate {report.get_reach_rate():.1f}%")
    return 0


def main():
    """Main entry point with command-line interface."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
