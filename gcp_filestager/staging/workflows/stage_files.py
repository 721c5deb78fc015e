"""Startup workflow that localizes extra files before the main workload runs."""
import logging
from pathlib import Path
from typing import List, Optional

from ..domains.gcp_client import SecretFetcher
from ..domains.gcs_client import ObjectStorageFetcher
from ..domains.locators import resolve_source_kind, split_locators
from ..domains.materializer import LocalMaterializer
from ..domains.models import SourceKind, StagingOptions
from ..domains.security import apply_disabled_algorithms

logger = logging.getLogger(__name__)


def stage_extra_files(
    extra_files_to_stage: Optional[str],
    materializer: Optional[LocalMaterializer] = None,
    storage_fetcher: Optional[ObjectStorageFetcher] = None,
    secret_fetcher: Optional[SecretFetcher] = None,
) -> List[Path]:
    """
    Localize every locator in a comma-separated list.

    Args:
        extra_files_to_stage: Raw option value; None or empty skips the step
        materializer: Destination writer (defaults to /extra_files)
        storage_fetcher: Backend for gs:// locators
        secret_fetcher: Backend for secret version locators

    Returns:
        Paths of the written files, in list order. A file written twice under
        the same derived name appears twice and holds the last payload.

    Raises:
        StagingError: On the first failure of any kind; later locators are
            not processed
    """
    if not extra_files_to_stage:
        logger.debug("No extra files to stage")
        return []

    materializer = materializer or LocalMaterializer()
    fetchers = {
        SourceKind.OBJECT_STORAGE: storage_fetcher or ObjectStorageFetcher(),
        SourceKind.SECRET: secret_fetcher or SecretFetcher(),
    }

    materializer.ensure_destination_directory()

    written = []
    for source in split_locators(extra_files_to_stage):
        kind = resolve_source_kind(source)
        payload = fetchers[kind].fetch(source)
        dest_file = materializer.write_file(payload.filename, payload.data, source)
        logger.info(f"Localized {source} to {dest_file.absolute()}.")
        written.append(dest_file)

    return written


def before_processing(
    options: StagingOptions,
    storage_fetcher: Optional[ObjectStorageFetcher] = None,
    secret_fetcher: Optional[SecretFetcher] = None,
) -> List[Path]:
    """
    Run the startup hook: apply security settings, then stage extra files.

    Any exception raised here must abort worker startup.
    """
    if options.disabled_algorithms is not None:
        apply_disabled_algorithms(options.disabled_algorithms)

    return stage_extra_files(
        options.extra_files_to_stage,
        materializer=LocalMaterializer(options.destination_directory),
        storage_fetcher=storage_fetcher,
        secret_fetcher=secret_fetcher,
    )
