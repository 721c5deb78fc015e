"""CLI entrypoint for gcp-filestager."""
import sys
import argparse
import logging

from .validators import validate_destination_dir, validate_locator

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr
    )


def cmd_version(args):
    """Show version information."""
    print(f"gcp-filestager {VERSION}")


def cmd_stage(args):
    """Run the startup staging hook."""
    from gcp_filestager.staging.domains.config_loader import load_options
    from gcp_filestager.staging.workflows.stage_files import before_processing

    options = load_options(
        args.config,
        extra_files_to_stage=args.extra_files_to_stage,
        disabled_algorithms=args.disabled_algorithms,
        destination_directory=args.destination_dir,
    )
    validate_destination_dir(options.destination_directory)

    written = before_processing(options)

    if not written:
        print("No extra files to stage.")
    for path in written:
        print(path)


def cmd_resolve(args):
    """Show how a locator would be staged, without fetching it."""
    from gcp_filestager.staging.domains.locators import derive_filename, resolve_source_kind

    validate_locator(args.locator)
    kind = resolve_source_kind(args.locator)
    filename = derive_filename(args.locator)

    print(f"Source: {kind.value}")
    print(f"Filename: {filename}")


def cmd_config_show(args):
    """Show the config file in use and the resolved options."""
    from gcp_filestager.staging.domains.config_loader import (
        get_config_path,
        default_config_path,
        load_options,
    )

    config_path = args.config or get_config_path()
    if config_path:
        print(f"Config path: {config_path}")
    else:
        print(f"Config path: {default_config_path()} (file not found)")

    options = load_options(args.config)
    print(f"extra_files_to_stage: {options.extra_files_to_stage}")
    print(f"disabled_algorithms: {options.disabled_algorithms}")
    print(f"destination_directory: {options.destination_directory}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filestager",
        description="gcp-filestager CLI - stage Cloud Storage objects and Secret Manager secrets to local disk",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (unrecognized source, fetch failure, write failure, etc.)
  2 - Usage error (invalid arguments, relative destination directory, etc.)

Environment variables:
  EXTRA_FILES_TO_STAGE        - Comma-separated locators to stage
  DISABLED_ALGORITHMS         - Disabled TLS algorithms ("none" clears the list)
  FILESTAGER_DESTINATION_DIR  - Destination directory (default: /extra_files)
  FILESTAGER_CONFIG           - Path to YAML config file
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of gcp-filestager"
    )

    stage_parser = subparsers.add_parser(
        "stage",
        help="Stage extra files to local disk",
        description="""
Fetch every locator and write it to the destination directory.

Supported locators:
  gs://bucket/path/to/file.txt                       -> file.txt
  projects/PROJECT/secrets/SECRET/versions/VERSION   -> SECRET

The destination directory must not already exist. The first failure aborts
the whole step.
        """
    )
    stage_parser.add_argument(
        "--extra-files-to-stage",
        help="Comma-separated list of locators"
    )
    stage_parser.add_argument(
        "--disabled-algorithms",
        help="Disabled TLS algorithms; 'none' clears the list"
    )
    stage_parser.add_argument(
        "--destination-dir",
        help="Absolute destination directory (default: /extra_files)"
    )
    stage_parser.add_argument(
        "--config",
        help="Path to YAML config file"
    )

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show source kind and local filename for a locator",
        description="Classify a single locator and print its derived filename. No network calls are made."
    )
    resolve_parser.add_argument("locator", help="A single gs:// URI or secret version name")

    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Inspect gcp-filestager configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    config_show_parser = config_subparsers.add_parser(
        "show",
        help="Show config path and resolved options",
        description="Display the config file in use and the options after env var overrides"
    )
    config_show_parser.add_argument(
        "--config",
        help="Path to YAML config file"
    )

    parser.config_parser = config_parser
    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (staging or configuration failures)
        2 - Usage errors (invalid arguments)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "stage":
            cmd_stage(args)
        elif args.command == "resolve":
            cmd_resolve(args)
        elif args.command == "config":
            if args.config_command == "show":
                cmd_config_show(args)
            else:
                parser.config_parser.print_help()
                sys.exit(2)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
