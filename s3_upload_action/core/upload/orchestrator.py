"""
The upload flow.

One run, in order: upload the file, resolve its URL, optionally render and
upload a QR image of that URL. The orchestrator never reads inputs or
environment itself; it gets a validated UploadRequest plus the three
collaborators it talks to.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from .keys import build_file_key, build_qr_key
from .models import (
    QR_CONTENT_TYPE,
    SIGNED_URL_TTL_SECONDS,
    UploadOutcome,
    UploadRequest,
)
from .urls import public_url, replace_domain

logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """The storage operations the upload flow needs."""
    
    async def upload_file(
        self,
        file_path: str,
        key: str,
        content_type: Optional[str],
        public: bool,
    ) -> None:
        ...
    
    async def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: Optional[str],
        public: bool,
    ) -> None:
        ...
    
    async def get_signed_url(self, key: str, expires_in: int) -> str:
        ...


class CodeRenderer(Protocol):
    """Renders a payload into a scannable PNG at `path`."""
    
    async def render(self, path: Path, payload: str, width: int) -> None:
        ...


class OutputSink(Protocol):
    """Where named step outputs and the failure marker go."""
    
    def set_output(self, name: str, value: str) -> None:
        ...
    
    def set_failed(self, message: str) -> None:
        ...


class UploadOrchestrator:
    """
    Runs one upload.
    
    Outputs are emitted to the sink as soon as they are known, so a failure
    halfway (QR upload, say) still leaves the file-url output in place.
    Nothing is rolled back.
    """
    
    def __init__(
        self,
        storage: ObjectStorage,
        renderer: CodeRenderer,
        sink: OutputSink,
        qr_temp_path: str = "./s3-upload-action-qr.png",
    ) -> None:
        self._storage = storage
        self._renderer = renderer
        self._sink = sink
        self._qr_temp_path = Path(qr_temp_path)
    
    async def run(self, request: UploadRequest) -> UploadOutcome:
        file_key = build_file_key(
            request.bucket_root, request.destination_dir, request.file_path
        )
        outcome = UploadOutcome(file_key=file_key)
        
        await self._storage.upload_file(
            request.file_path,
            file_key,
            content_type=request.content_type,
            public=request.is_public,
        )
        
        logger.info(
            "Uploaded file",
            extra={"bucket": request.bucket, "key": file_key, "public": request.is_public}
        )
        
        if not request.wants_url:
            return outcome
        
        outcome.file_url = await self.resolve_file_url(request, file_key)
        if request.output_file_url:
            self._emit(outcome, "file-url", outcome.file_url)
        
        if request.output_qr_url and outcome.file_url:
            await self._upload_qr(request, outcome)
        
        return outcome
    
    async def resolve_file_url(self, request: UploadRequest, file_key: str) -> str:
        """Public static URL, or a short-lived signed URL for private objects."""
        if request.is_public:
            url = public_url(request.bucket, request.region, file_key)
            return replace_domain(
                url,
                request.bucket,
                request.region,
                request.bucket_root,
                request.alternative_domain_public,
            )
        
        url = await self._storage.get_signed_url(
            file_key, expires_in=SIGNED_URL_TTL_SECONDS
        )
        return replace_domain(
            url,
            request.bucket,
            request.region,
            request.bucket_root,
            request.alternative_domain_private,
        )
    
    async def _upload_qr(self, request: UploadRequest, outcome: UploadOutcome) -> None:
        qr_key = build_qr_key(request.bucket_root, request.destination_dir)
        
        try:
            await self._renderer.render(
                self._qr_temp_path, outcome.file_url, request.qr_width
            )
            data = self._qr_temp_path.read_bytes()
            # QR must be scannable even when the file itself is private
            await self._storage.upload_bytes(
                data, qr_key, content_type=QR_CONTENT_TYPE, public=True
            )
        finally:
            if self._qr_temp_path.exists():
                os.remove(self._qr_temp_path)
        
        outcome.qr_key = qr_key
        outcome.qr_url = replace_domain(
            public_url(request.bucket, request.region, qr_key),
            request.bucket,
            request.region,
            request.bucket_root,
            request.alternative_domain_public,
        )
        
        logger.info(
            "Uploaded QR image",
            extra={"key": qr_key, "size_bytes": len(data)}
        )
        
        self._emit(outcome, "qr-url", outcome.qr_url)
    
    def _emit(self, outcome: UploadOutcome, name: str, value: str) -> None:
        self._sink.set_output(name, value)
        outcome.outputs[name] = value
