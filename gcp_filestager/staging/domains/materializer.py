"""Local destination directory and file writes."""
import logging
from pathlib import Path

from .errors import DirectoryCreationFailure, FileWriteFailure
from .models import DEFAULT_DESTINATION_DIRECTORY

logger = logging.getLogger(__name__)


class LocalMaterializer:
    """Owns the destination directory where staged files are stored."""

    def __init__(self, destination_directory: str = DEFAULT_DESTINATION_DIRECTORY):
        self.destination_directory = Path(destination_directory)
        self._created = False

    def ensure_destination_directory(self) -> Path:
        """
        Create the destination directory once.

        The directory must not exist yet and its parent must exist. A directory
        left behind by an earlier run is rejected rather than reused.

        Raises:
            DirectoryCreationFailure: If the directory could not be created
        """
        if self._created:
            return self.destination_directory

        try:
            self.destination_directory.mkdir()
        except FileExistsError:
            raise DirectoryCreationFailure(str(self.destination_directory), "already exists")
        except OSError as e:
            raise DirectoryCreationFailure(str(self.destination_directory), str(e)) from e

        self._created = True
        logger.info(f"Created destination directory {self.destination_directory}")
        return self.destination_directory

    def write_file(self, filename: str, data: bytes, locator: str) -> Path:
        """
        Write payload bytes to <destination>/<filename>, truncating any existing file.

        Raises:
            FileWriteFailure: If the file could not be written
        """
        dest_file = self.destination_directory / filename
        try:
            with open(dest_file, "wb") as f:
                f.write(data)
        except OSError as e:
            raise FileWriteFailure(str(dest_file), locator, str(e)) from e
        return dest_file
