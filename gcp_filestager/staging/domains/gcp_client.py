"""GCP Secret Manager fetcher."""
import logging
from typing import Optional

from google.cloud import secretmanager

from .errors import FetchFailure
from .locators import parse_secret_version
from .models import FetchedPayload

logger = logging.getLogger(__name__)


class SecretFetcher:
    """Reads a secret version payload and names it after the secret id."""

    def __init__(self, client: Optional[secretmanager.SecretManagerServiceClient] = None):
        self._client = client

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def fetch(self, locator: str) -> FetchedPayload:
        """
        Fetch the payload of an exact secret version.

        Args:
            locator: projects/{project}/secrets/{secret}/versions/{version}

        Returns:
            FetchedPayload named after the secret id

        Raises:
            MalformedSecretReference: If the locator does not parse (no call is made)
            FetchFailure: If Secret Manager access fails
        """
        secret_version = parse_secret_version(locator)

        try:
            response = self.client.access_secret_version(request={"name": secret_version.name})
            data = bytes(response.payload.data)
        except Exception as e:
            raise FetchFailure(locator, e) from e

        logger.debug(f"Read {len(data)} bytes from secret {secret_version.name}")
        return FetchedPayload(source=locator, filename=secret_version.secret, data=data)
