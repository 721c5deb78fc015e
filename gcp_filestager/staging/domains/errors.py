"""Error taxonomy for extra file staging.

Every error is fatal to the startup step. Each one carries the offending
locator, and the filesystem errors also carry the target path.
"""
from typing import Optional


class StagingError(Exception):
    """Base class for all staging failures."""

    def __init__(self, message: str, locator: Optional[str] = None):
        super().__init__(message)
        self.locator = locator


class UnrecognizedSource(StagingError):
    """Locator matches neither the gs:// nor the secret version shape."""

    def __init__(self, locator: str):
        super().__init__(
            f"Unrecognized source in extra_files_to_stage: {locator}. Please enter a source in the format,"
            f" gs:// or projects/project-id/secrets/secret-id/versions/version.",
            locator,
        )


class MalformedSecretReference(StagingError):
    """Secret-shaped locator failed the strict structural parse."""

    def __init__(self, locator: str):
        super().__init__(
            f"Malformed secret reference: {locator!r}. Provided Secret must be in the form"
            f" projects/{{project}}/secrets/{{secret}}/versions/{{secret_version}}",
            locator,
        )


class FetchFailure(StagingError):
    """Remote read failed (network, auth, not found, unresolvable URI)."""

    def __init__(self, locator: str, cause: BaseException):
        super().__init__(f"Error fetching {locator}: {cause}", locator)
        self.cause = cause


class DirectoryCreationFailure(StagingError):
    """Destination directory could not be created."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Could not create destination folder for extra_files_to_stage: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class FileWriteFailure(StagingError):
    """Local write of a fetched payload failed."""

    def __init__(self, path: str, locator: str, reason: str = ""):
        message = f"Error saving file: {locator} to {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, locator)
        self.path = path
