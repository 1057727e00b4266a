"""
Unit tests for the upload flow.

Storage is the in-memory mock and the QR renderer is a stub that writes
fixed bytes, so these run without network access or image libraries.
"""

import re
from pathlib import Path

import pytest

from s3_upload_action.core.upload.models import SIGNED_URL_TTL_SECONDS
from s3_upload_action.core.upload.orchestrator import UploadOrchestrator
from s3_upload_action.core.upload.validation import build_request
from s3_upload_action.infrastructure.actions.outputs import ConsoleOutputSink
from s3_upload_action.infrastructure.storage.client import (
    ACL_PRIVATE,
    ACL_PUBLIC,
    MockStorageClient,
    StorageError,
)


FAKE_PNG = b"\x89PNG\r\n\x1a\nfake"


class StubRenderer:
    """Writes a fake PNG and remembers what it was asked to render."""
    
    def __init__(self, fail: bool = False) -> None:
        self.calls = []
        self._fail = fail
    
    async def render(self, path: Path, payload: str, width: int) -> None:
        self.calls.append((payload, width))
        Path(path).write_bytes(FAKE_PNG)
        if self._fail:
            raise OSError("disk full")


class QrUploadFailingStorage(MockStorageClient):
    """Accepts the file but refuses the QR image."""
    
    async def upload_bytes(self, data, key, content_type=None, public=False):
        raise StorageError("Access Denied")


@pytest.fixture
def storage():
    return MockStorageClient("my-bucket", "ap-northeast-1")


@pytest.fixture
def sink():
    return ConsoleOutputSink()


@pytest.fixture
def qr_path(tmp_path):
    return tmp_path / "s3-upload-action-qr.png"


def make_orchestrator(storage, sink, qr_path, renderer=None):
    return UploadOrchestrator(
        storage=storage,
        renderer=renderer or StubRenderer(),
        sink=sink,
        qr_temp_path=str(qr_path),
    )


# ---------------------------------------------------------------------------
# Primary upload and file URL
# ---------------------------------------------------------------------------

class TestPrivateUpload:
    """Private files get a signed URL."""
    
    @pytest.mark.asyncio
    async def test_default_layout_and_signed_url(self, storage, sink, qr_path, make_inputs):
        """Empty root and dir give artifacts/<random>/<name>, signed URL emitted, no QR."""
        request = build_request(make_inputs(expire="180"))
        renderer = StubRenderer()
        
        outcome = await make_orchestrator(storage, sink, qr_path, renderer).run(request)
        
        assert re.fullmatch(r"artifacts/[A-Za-z0-9]{32}/README\.md", outcome.file_key)
        assert list(storage.objects) == [outcome.file_key]
        assert storage.objects[outcome.file_key].acl == ACL_PRIVATE
        assert storage.signed_url_calls == 1
        assert f"X-Amz-Expires={SIGNED_URL_TTL_SECONDS}" in sink.outputs["file-url"]
        assert "qr-url" not in sink.outputs
        assert renderer.calls == []
    
    @pytest.mark.asyncio
    async def test_signed_url_window_ignores_expire(self, storage, sink, qr_path, make_inputs):
        """The expire input does not change the signed URL's lifetime."""
        request = build_request(make_inputs(expire="604800"))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert "X-Amz-Expires=600" in outcome.file_url
    
    @pytest.mark.asyncio
    async def test_signed_urls_differ_per_call(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(destination_dir="fixed"))
        orchestrator = make_orchestrator(storage, sink, qr_path)
        
        first = await orchestrator.run(request)
        second = await orchestrator.run(request)
        
        assert first.file_url != second.file_url
    
    @pytest.mark.asyncio
    async def test_alternative_private_domain(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(
            bucket_root="private",
            destination_dir="run1",
            alternative_domain_private="files.example.com",
        ))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert outcome.file_url.startswith("https://files.example.com/run1/README.md?")
    
    @pytest.mark.asyncio
    async def test_public_domain_not_used_for_private_file(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(alternative_domain_public="cdn.example.com"))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert outcome.file_url.startswith("https://my-bucket.s3.ap-northeast-1.amazonaws.com/")


class TestPublicUpload:
    """Public files get a deterministic URL and no signing call."""
    
    @pytest.mark.asyncio
    async def test_alternative_public_domain(self, storage, sink, qr_path, tmp_path, make_inputs):
        report = tmp_path / "report.pdf"
        report.write_bytes(b"%PDF-1.4")
        request = build_request(make_inputs(
            file_path=str(report),
            public="true",
            bucket_root="pub/",
            destination_dir="v1/",
            alternative_domain_public="cdn.example.com",
        ))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert outcome.file_key == "pub/v1/report.pdf"
        assert storage.objects["pub/v1/report.pdf"].acl == ACL_PUBLIC
        assert storage.objects["pub/v1/report.pdf"].content_type == "application/pdf"
        assert sink.outputs["file-url"] == "https://cdn.example.com/v1/report.pdf"
        assert storage.signed_url_calls == 0
    
    @pytest.mark.asyncio
    async def test_static_url_without_alternative(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(public="true", bucket_root="pub", destination_dir="v1"))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert outcome.file_url == "https://my-bucket.s3.ap-northeast-1.amazonaws.com/pub/v1/README.md"


class TestNoUrlRequested:
    
    @pytest.mark.asyncio
    async def test_url_resolution_skipped(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(output_file_url="false", output_qr_url="false"))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert outcome.file_url is None
        assert sink.outputs == {}
        assert storage.signed_url_calls == 0
        assert len(storage.objects) == 1


# ---------------------------------------------------------------------------
# QR image
# ---------------------------------------------------------------------------

class TestQrImage:
    """Tests for QR rendering and upload."""
    
    @pytest.mark.asyncio
    async def test_qr_only_output(self, storage, sink, qr_path, make_inputs):
        """File URL is still computed for the QR but not emitted."""
        request = build_request(make_inputs(
            public="true",
            output_file_url="false",
            output_qr_url="true",
            bucket_root="pub",
            destination_dir="v1",
            qr_width="250",
        ))
        renderer = StubRenderer()
        
        outcome = await make_orchestrator(storage, sink, qr_path, renderer).run(request)
        
        file_url = "https://my-bucket.s3.ap-northeast-1.amazonaws.com/pub/v1/README.md"
        assert outcome.file_url == file_url
        assert "file-url" not in sink.outputs
        assert sink.outputs["qr-url"] == "https://my-bucket.s3.ap-northeast-1.amazonaws.com/pub/v1/qr.png"
        assert renderer.calls == [(file_url, 250)]
    
    @pytest.mark.asyncio
    async def test_qr_is_public_even_for_private_file(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(
            public="false",
            output_qr_url="true",
            destination_dir="run1",
        ))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert storage.objects[outcome.file_key].acl == ACL_PRIVATE
        qr_object = storage.objects["artifacts/run1/qr.png"]
        assert qr_object.acl == ACL_PUBLIC
        assert qr_object.content_type == "image/png"
        assert qr_object.data == FAKE_PNG
    
    @pytest.mark.asyncio
    async def test_qr_url_uses_public_alternative_domain(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(
            output_qr_url="true",
            bucket_root="pub",
            destination_dir="v1",
            alternative_domain_public="cdn.example.com",
        ))
        
        outcome = await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert outcome.qr_url == "https://cdn.example.com/v1/qr.png"
    
    @pytest.mark.asyncio
    async def test_temp_file_removed_after_upload(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(output_qr_url="true"))
        
        await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert not qr_path.exists()
    
    @pytest.mark.asyncio
    async def test_temp_file_removed_when_render_fails(self, storage, sink, qr_path, make_inputs):
        request = build_request(make_inputs(output_qr_url="true"))
        orchestrator = make_orchestrator(storage, sink, qr_path, StubRenderer(fail=True))
        
        with pytest.raises(OSError, match="disk full"):
            await orchestrator.run(request)
        
        assert not qr_path.exists()
    
    @pytest.mark.asyncio
    async def test_qr_upload_failure_keeps_earlier_output(self, sink, qr_path, make_inputs):
        """The file and its file-url output stay in place; nothing is rolled back."""
        storage = QrUploadFailingStorage("my-bucket", "ap-northeast-1")
        request = build_request(make_inputs(output_qr_url="true"))
        
        with pytest.raises(StorageError, match="Access Denied"):
            await make_orchestrator(storage, sink, qr_path).run(request)
        
        assert len(storage.objects) == 1
        assert "file-url" in sink.outputs
        assert "qr-url" not in sink.outputs
        assert not qr_path.exists()
