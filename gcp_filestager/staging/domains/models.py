"""Domain models for extra file staging."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_DESTINATION_DIRECTORY = "/extra_files"


class SourceKind(Enum):
    """Backend a locator is dispatched to."""
    OBJECT_STORAGE = "gcs"
    SECRET = "secret"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class SecretVersionName:
    """Parsed projects/{project}/secrets/{secret}/versions/{version} name."""
    project: str
    secret: str
    version: str

    @property
    def name(self) -> str:
        return f"projects/{self.project}/secrets/{self.secret}/versions/{self.version}"


@dataclass(frozen=True)
class FetchedPayload:
    """Bytes read from a backend plus the local filename they are written to."""
    source: str
    filename: str
    data: bytes


@dataclass
class StagingOptions:
    """Startup options consumed by the staging hook."""
    extra_files_to_stage: Optional[str] = None
    disabled_algorithms: Optional[str] = None
    destination_directory: str = DEFAULT_DESTINATION_DIRECTORY
