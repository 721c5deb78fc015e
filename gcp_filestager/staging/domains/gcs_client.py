"""Cloud Storage fetcher."""
import logging
from typing import Optional

from google.cloud import storage

from .errors import FetchFailure
from .locators import gcs_filename, parse_gcs_uri
from .models import FetchedPayload

logger = logging.getLogger(__name__)


class ObjectStorageFetcher:
    """Reads a whole Cloud Storage object into memory."""

    def __init__(self, client: Optional[storage.Client] = None):
        self._client = client

    @property
    def client(self) -> storage.Client:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = storage.Client()
        return self._client

    def fetch(self, locator: str) -> FetchedPayload:
        """
        Fetch a gs:// object.

        The filename is the same as the object's name in Cloud Storage, without
        its directory components.

        Raises:
            FetchFailure: If the URI cannot be resolved or the read fails
        """
        try:
            bucket_name, object_name = parse_gcs_uri(locator)
            filename = gcs_filename(object_name)
            blob = self.client.bucket(bucket_name).blob(object_name)
            data = blob.download_as_bytes()
        except Exception as e:
            raise FetchFailure(locator, e) from e

        logger.debug(f"Read {len(data)} bytes from gs://{bucket_name}/{object_name}")
        return FetchedPayload(source=locator, filename=filename, data=data)
