"""Test suite for the staging startup workflow."""
from unittest import mock

import pytest
from google.api_core import exceptions as api_exceptions

from gcp_filestager.staging.domains import security
from gcp_filestager.staging.domains.errors import (
    DirectoryCreationFailure,
    FetchFailure,
    StagingError,
    UnrecognizedSource,
)
from gcp_filestager.staging.domains.gcp_client import SecretFetcher
from gcp_filestager.staging.domains.gcs_client import ObjectStorageFetcher
from gcp_filestager.staging.domains.materializer import LocalMaterializer
from gcp_filestager.staging.domains.models import StagingOptions
from gcp_filestager.staging.workflows.stage_files import before_processing, stage_extra_files


@pytest.fixture
def dest_dir(tmp_path):
    return tmp_path / "extra_files"


@pytest.fixture
def storage_client():
    client = mock.MagicMock()
    client.bucket.return_value.blob.return_value.download_as_bytes.return_value = b"AAA"
    return client


@pytest.fixture
def secret_client():
    client = mock.MagicMock()
    client.access_secret_version.return_value.payload.data = b"BBB"
    return client


@pytest.fixture
def stage(dest_dir, storage_client, secret_client):
    """Run stage_extra_files against mocked backends and a temp destination."""
    def _stage(value):
        return stage_extra_files(
            value,
            materializer=LocalMaterializer(str(dest_dir)),
            storage_fetcher=ObjectStorageFetcher(client=storage_client),
            secret_fetcher=SecretFetcher(client=secret_client),
        )
    return _stage


@pytest.fixture(autouse=True)
def reset_security_properties(monkeypatch):
    monkeypatch.setattr(security, "_security_properties", {})


class TestStageExtraFiles:
    """Test suite for stage_extra_files."""

    def test_end_to_end_mixed_sources(self, stage, dest_dir):
        """Test that one gs:// object and one secret are both localized."""
        written = stage("gs://bkt/file1.bin,projects/proj/secrets/cred/versions/2")

        assert written == [dest_dir / "file1.bin", dest_dir / "cred"]
        assert sorted(p.name for p in dest_dir.iterdir()) == ["cred", "file1.bin"]
        assert (dest_dir / "file1.bin").read_bytes() == b"AAA"
        assert (dest_dir / "cred").read_bytes() == b"BBB"

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_value_skips_everything(self, stage, dest_dir, storage_client, secret_client, value):
        """Test that no locator list means no directory and no calls."""
        assert stage(value) == []

        assert not dest_dir.exists()
        storage_client.bucket.assert_not_called()
        secret_client.access_secret_version.assert_not_called()

    def test_colliding_names_keep_last_payload(self, stage, dest_dir, secret_client):
        """Test that the last locator with a shared filename wins."""
        first = mock.MagicMock()
        first.payload.data = b"from-project-a"
        second = mock.MagicMock()
        second.payload.data = b"from-project-b"
        secret_client.access_secret_version.side_effect = [first, second]

        stage("projects/a/secrets/my-secret/versions/1,projects/b/secrets/my-secret/versions/1")

        assert [p.name for p in dest_dir.iterdir()] == ["my-secret"]
        assert (dest_dir / "my-secret").read_bytes() == b"from-project-b"

    def test_unrecognized_source_aborts_remaining(self, stage, dest_dir, storage_client):
        """Test that the first unrecognized locator stops the step."""
        with pytest.raises(UnrecognizedSource) as exc_info:
            stage("gs://bkt/first.txt,/local/file.txt,gs://bkt/third.txt")

        assert exc_info.value.locator == "/local/file.txt"
        assert (dest_dir / "first.txt").exists()
        assert not (dest_dir / "third.txt").exists()
        storage_client.bucket.assert_called_once_with("bkt")

    def test_trailing_comma_is_ignored(self, stage, dest_dir, storage_client):
        """Test that a trailing comma does not add an empty locator."""
        written = stage("gs://bkt/file1.bin,")

        assert written == [dest_dir / "file1.bin"]
        assert (dest_dir / "file1.bin").read_bytes() == b"AAA"
        storage_client.bucket.assert_called_once_with("bkt")

    def test_interior_empty_locator_is_fatal(self, stage, dest_dir):
        """Test that an empty locator between commas is unrecognized."""
        with pytest.raises(UnrecognizedSource) as exc_info:
            stage("gs://bkt/file1.bin,,gs://bkt/file2.bin")

        assert exc_info.value.locator == ""
        assert not (dest_dir / "file2.bin").exists()

    def test_whitespace_is_not_trimmed(self, stage):
        """Test that a space after a comma makes the locator unrecognized."""
        with pytest.raises(UnrecognizedSource) as exc_info:
            stage("gs://bkt/a.txt, gs://bkt/b.txt")

        assert exc_info.value.locator == " gs://bkt/b.txt"

    def test_empty_secret_segment_makes_no_call(self, stage, secret_client):
        """Test that an empty project segment fails before any network call."""
        with pytest.raises(StagingError):
            stage("projects//secrets/x/versions/1")

        secret_client.access_secret_version.assert_not_called()

    def test_fetch_failure_is_fatal(self, stage, secret_client):
        """Test that a backend error aborts the step."""
        secret_client.access_secret_version.side_effect = api_exceptions.NotFound("missing")

        with pytest.raises(FetchFailure) as exc_info:
            stage("projects/proj/secrets/cred/versions/9")

        assert exc_info.value.locator == "projects/proj/secrets/cred/versions/9"

    def test_pre_existing_directory_aborts_before_fetch(self, stage, dest_dir, storage_client):
        """Test that a stale destination directory fails before any fetch."""
        dest_dir.mkdir()

        with pytest.raises(DirectoryCreationFailure):
            stage("gs://bkt/file1.bin")

        storage_client.bucket.assert_not_called()


class TestBeforeProcessing:
    """Test suite for the startup hook entry point."""

    def test_applies_security_then_stages(self, dest_dir, storage_client, secret_client):
        """Test that both the security setting and staging are applied."""
        options = StagingOptions(
            extra_files_to_stage="gs://bkt/file1.bin",
            disabled_algorithms="SSLv3, RC4",
            destination_directory=str(dest_dir),
        )

        written = before_processing(
            options,
            storage_fetcher=ObjectStorageFetcher(client=storage_client),
            secret_fetcher=SecretFetcher(client=secret_client),
        )

        assert written == [dest_dir / "file1.bin"]
        assert security.get_security_property(security.TLS_DISABLED_ALGORITHMS) == "SSLv3, RC4"

    def test_no_options_has_no_side_effects(self, dest_dir):
        """Test that empty options neither write properties nor create directories."""
        before_processing(StagingOptions(destination_directory=str(dest_dir)))

        assert not dest_dir.exists()
        assert security.get_security_property(security.TLS_DISABLED_ALGORITHMS) is None
