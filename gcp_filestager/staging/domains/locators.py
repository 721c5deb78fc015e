"""Locator classification and parsing.

Locators come from a single comma-separated option value. Each one is either a
Cloud Storage URI (gs://bucket/path/to/object) or a Secret Manager secret
version name (projects/{project}/secrets/{secret}/versions/{version}).
"""
import posixpath
import re
from typing import List, Tuple

from .errors import FetchFailure, MalformedSecretReference, UnrecognizedSource
from .models import SecretVersionName, SourceKind

GCS_SCHEME = "gs://"

GCS_PATTERN = re.compile(r"^gs://")
SECRET_MANAGER_PATTERN = re.compile(
    r"^projects/[^\n\r/]+/secrets/[^\n\r/]+/versions/[^\n\r/]+$"
)
SECRET_VERSION_NAME_PATTERN = re.compile(
    r"projects/(?P<project>[^\n\r/]+)/secrets/(?P<secret>[^\n\r/]+)/versions/(?P<version>[^\n\r/]+)"
)


def split_locators(extra_files_to_stage: str) -> List[str]:
    """
    Split the raw option value into locators.

    Segments are returned as-is: no trimming, no deduplication. Trailing empty
    segments are dropped; interior ones are kept. There is no escape for a
    comma inside a locator.
    """
    segments = extra_files_to_stage.split(",")
    while segments and segments[-1] == "":
        segments.pop()
    return segments


def classify_locator(locator: str) -> SourceKind:
    """
    Classify a locator by its syntactic shape.

    Checked in priority order: Cloud Storage prefix first, then the secret
    version name. Never raises.
    """
    if GCS_PATTERN.match(locator):
        return SourceKind.OBJECT_STORAGE
    if SECRET_MANAGER_PATTERN.match(locator):
        return SourceKind.SECRET
    return SourceKind.UNRECOGNIZED


def resolve_source_kind(locator: str) -> SourceKind:
    """Classify a locator, raising UnrecognizedSource if no backend applies."""
    kind = classify_locator(locator)
    if kind is SourceKind.UNRECOGNIZED:
        raise UnrecognizedSource(locator)
    return kind


def parse_secret_version(locator: str) -> SecretVersionName:
    """
    Strictly parse a secret version name.

    Args:
        locator: Secret version of the form
            projects/{project}/secrets/{secret}/versions/{secret_version}

    Returns:
        SecretVersionName with project, secret and version

    Raises:
        MalformedSecretReference: If the whole string does not conform
    """
    match = SECRET_VERSION_NAME_PATTERN.fullmatch(locator)
    if not match:
        raise MalformedSecretReference(locator)
    return SecretVersionName(
        project=match.group("project"),
        secret=match.group("secret"),
        version=match.group("version"),
    )


def parse_gcs_uri(locator: str) -> Tuple[str, str]:
    """
    Split a gs:// URI into bucket and object name.

    Raises:
        ValueError: If the URI names no bucket, no object, or a directory
    """
    if not locator.startswith(GCS_SCHEME):
        raise ValueError(f"Not a Cloud Storage URI: {locator}")

    bucket, _, object_name = locator[len(GCS_SCHEME):].partition("/")
    if not bucket:
        raise ValueError(f"Missing bucket in Cloud Storage URI: {locator}")
    if not object_name:
        raise ValueError(f"Missing object name in Cloud Storage URI: {locator}")
    if object_name.endswith("/"):
        raise ValueError(f"Expected a file, but got a directory: {locator}")
    return bucket, object_name


def gcs_filename(object_name: str) -> str:
    """Last path component of an object name."""
    return posixpath.basename(object_name)


def derive_filename(locator: str) -> str:
    """
    Compute the local filename a locator is written to, without fetching.

    Cloud Storage objects keep their basename; secrets are named after the
    secret id, dropping project and version.

    Raises:
        UnrecognizedSource: If no backend applies
        FetchFailure: If a gs:// URI names no bucket or file object
        MalformedSecretReference: If a secret name does not parse
    """
    kind = resolve_source_kind(locator)
    if kind is SourceKind.OBJECT_STORAGE:
        try:
            _, object_name = parse_gcs_uri(locator)
        except ValueError as e:
            raise FetchFailure(locator, e) from e
        return gcs_filename(object_name)
    return parse_secret_version(locator).secret
