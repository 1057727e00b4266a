"""Shared fixtures for the unit tests."""

from pathlib import Path

import pytest

from s3_upload_action.core.upload.models import UploadInputs


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """A small file to upload."""
    path = tmp_path / "README.md"
    path.write_text("# hello\n", encoding="utf-8")
    return path


@pytest.fixture
def make_inputs(source_file: Path):
    """Build UploadInputs with sensible defaults; override per test."""
    def _make(**overrides) -> UploadInputs:
        values = dict(
            aws_access_key_id="AKIATESTKEY",
            aws_secret_access_key="test-secret",
            aws_region="ap-northeast-1",
            aws_bucket="my-bucket",
            file_path=str(source_file),
            destination_dir="",
            bucket_root="",
            output_file_url="true",
            content_type="",
            output_qr_url="false",
            qr_width="120",
            public="false",
            expire="180",
            alternative_domain_public="",
            alternative_domain_private="",
        )
        values.update(overrides)
        return UploadInputs(**values)
    
    return _make
