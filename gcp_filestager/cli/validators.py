"""Input validation for CLI arguments."""
import os
import sys


def validate_destination_dir(path: str) -> None:
    """
    Validate the destination directory is an absolute path.

    Args:
        path: Destination directory to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not path:
        print("Error: Destination directory cannot be empty", file=sys.stderr)
        sys.exit(2)

    if not os.path.isabs(path):
        print(f"Error: Destination directory must be an absolute path: '{path}'", file=sys.stderr)
        print("\nExample: --destination-dir /extra_files", file=sys.stderr)
        sys.exit(2)


def validate_locator(locator: str) -> None:
    """
    Validate a single locator argument is non-empty and has no comma.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not locator:
        print("Error: Locator cannot be empty", file=sys.stderr)
        sys.exit(2)

    if "," in locator:
        print(f"Error: Locator '{locator}' contains a comma", file=sys.stderr)
        print("\nPass a single locator, for example:", file=sys.stderr)
        print("  gs://bucket/path/to/file.txt", file=sys.stderr)
        print("  projects/my-project/secrets/my-secret/versions/1", file=sys.stderr)
        sys.exit(2)
