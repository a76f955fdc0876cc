"""Command line front end for wiredialer.

Checks WireGuard configuration files and shows what would be handed to the
tunnel device: interface addresses, DNS servers, MTU and the control string.

Usage:
    python -m wiredialer [-v] [--format {summary,ipc,json}] config_file [config_file ...]

Arguments:
    config_file: Path to a WireGuard configuration file
"""

import argparse
import logging
import sys

from wiredialer.errors import ConfigError, ErrorCollector
from wiredialer.models import TunnelConfig
from wiredialer.parser import parse_config_file

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_CONFIG = 1
EXIT_FILE_ERROR = 2

OUTPUT_FORMATS = ("summary", "ipc", "json")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, use DEBUG level. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_config(config: TunnelConfig, output_format: str = "summary") -> str:
    """Render a parsed configuration for display.

    Args:
        config: Parsed tunnel configuration
        output_format: One of "summary", "ipc" or "json"

    Returns:
        Text to print (without trailing newline)
    """
    if output_format == "ipc":
        return config.ipc_config.rstrip("\n")
    if output_format == "json":
        return config.model_dump_json()
    if output_format != "summary":
        raise ValueError(f"Unknown output format: {output_format}")

    return "\n".join(
        [
            "Addresses: " + ", ".join(str(a) for a in config.interface_addresses),
            "DNS: " + ", ".join(str(a) for a in config.dns_addresses),
            f"MTU: {config.mtu}",
        ]
    )


def check_configs(paths: list[str], output_format: str = "summary") -> int:
    """Parse each configuration file and print the result.

    A failing file does not stop the remaining ones from being checked; all
    failures are reported at the end.

    Args:
        paths: Configuration file paths
        output_format: Output format passed to format_config()

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    error_collector = ErrorCollector()

    for path in paths:
        logger.info("Parsing configuration from %s", path)
        try:
            config = parse_config_file(path)
        except ConfigError as e:
            error_collector.add_error(
                source=path,
                message="Invalid configuration",
                exception=e,
            )
            continue
        except (OSError, UnicodeDecodeError) as e:
            error_collector.add_error(
                source=path,
                message="Cannot read configuration file",
                exception=e,
            )
            continue

        if len(paths) > 1:
            print(f"# {path}")
        print(format_config(config, output_format))

    if not error_collector.has_errors():
        return EXIT_SUCCESS

    error_collector.log_summary()
    if error_collector.has_failures_of(ConfigError):
        return EXIT_INVALID_CONFIG
    return EXIT_FILE_ERROR


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the wiredialer command.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Parse WireGuard configuration files for a user-space tunnel",
        prog="python -m wiredialer",
    )
    parser.add_argument(
        "config_files",
        nargs="+",
        metavar="config_file",
        help="Path to a WireGuard configuration file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="summary",
        help="Output format (default: summary)",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    return check_configs(args.config_files, output_format=args.format)


if __name__ == "__main__":
    sys.exit(main())
