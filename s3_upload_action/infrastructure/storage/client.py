"""
Object storage client for uploaded files and QR images.

Wraps boto3's S3 client with the three operations the upload flow uses:
stream a file, put bytes, presign a GET. A mock client keeps objects in
memory so the whole flow can run without a bucket.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

ACL_PUBLIC = "public-read"
ACL_PRIVATE = "private"


class StorageError(Exception):
    """
    Raised when storage operations fail.
    
    The message is the underlying error's message unchanged, since that is
    what ends up in the step's failure marker.
    """
    pass


@dataclass
class StorageConfig:
    """Credentials and addressing for one bucket."""
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    region: str


class StorageClient(Protocol):
    """
    Protocol for object storage operations.
    
    Tests provide the mock; the action uses S3.
    """
    
    async def upload_file(
        self,
        file_path: str,
        key: str,
        content_type: Optional[str] = None,
        public: bool = False,
    ) -> None:
        """Stream a local file to `key`."""
        ...
    
    async def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: Optional[str] = None,
        public: bool = False,
    ) -> None:
        """Upload in-memory bytes to `key`."""
        ...
    
    async def get_signed_url(self, key: str, expires_in: int) -> str:
        """Generate a temporary download URL."""
        ...


def _put_params(
    bucket: str,
    key: str,
    body: Any,
    content_type: Optional[str],
    public: bool,
) -> dict:
    params = {
        'Bucket': bucket,
        'Key': key,
        'Body': body,
        'ACL': ACL_PUBLIC if public else ACL_PRIVATE,
    }
    if content_type:
        params['ContentType'] = content_type
    return params


class S3StorageClient:
    """
    AWS S3 storage client.
    
    Methods are async to match the Protocol even though boto3 is
    synchronous. Virtual-hosted addressing keeps signed URLs on the
    `{bucket}.s3.{region}.amazonaws.com` host, which alternate domain
    replacement relies on.
    """
    
    def __init__(self, config: StorageConfig, s3_client: Any = None) -> None:
        self._config = config
        
        if s3_client is None:
            import boto3
            from botocore.config import Config
            
            boto_config = Config(
                signature_version='s3v4',
                s3={
                    'addressing_style': 'virtual',
                    'us_east_1_regional_endpoint': 'regional',
                },
            )
            
            s3_client = boto3.client(
                's3',
                aws_access_key_id=config.access_key_id,
                aws_secret_access_key=config.secret_access_key,
                region_name=config.region,
                config=boto_config,
            )
        
        self._s3_client = s3_client
        
        logger.info(
            "Initialized S3 storage client",
            extra={"bucket": config.bucket_name, "region": config.region}
        )
    
    async def upload_file(
        self,
        file_path: str,
        key: str,
        content_type: Optional[str] = None,
        public: bool = False,
    ) -> None:
        """Stream a local file to S3 without reading it into memory first."""
        try:
            with open(file_path, 'rb') as body:
                self._s3_client.put_object(
                    **_put_params(
                        self._config.bucket_name, key, body, content_type, public
                    )
                )
        except Exception as e:
            logger.error(
                "Failed to upload file",
                extra={"file_path": file_path, "key": key, "error": str(e)}
            )
            raise StorageError(str(e)) from e
        
        logger.debug(
            "Uploaded file to S3",
            extra={"key": key, "content_type": content_type, "public": public}
        )
    
    async def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: Optional[str] = None,
        public: bool = False,
    ) -> None:
        try:
            self._s3_client.put_object(
                **_put_params(
                    self._config.bucket_name, key, data, content_type, public
                )
            )
        except Exception as e:
            logger.error(
                "Failed to upload bytes",
                extra={"key": key, "error": str(e)}
            )
            raise StorageError(str(e)) from e
        
        logger.debug(
            "Uploaded bytes to S3",
            extra={"key": key, "size_bytes": len(data), "public": public}
        )
    
    async def get_signed_url(self, key: str, expires_in: int) -> str:
        """
        Generate a presigned GET URL.
        
        Signing happens locally; no request is sent to S3.
        """
        try:
            return self._s3_client.generate_presigned_url(
                'get_object',
                Params={
                    'Bucket': self._config.bucket_name,
                    'Key': key,
                },
                ExpiresIn=expires_in,
            )
        except Exception as e:
            logger.error(
                "Failed to generate presigned URL",
                extra={"key": key, "error": str(e)}
            )
            raise StorageError(str(e)) from e


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

@dataclass
class StoredObject:
    data: bytes
    content_type: Optional[str]
    acl: str


class MockStorageClient:
    """
    In-memory storage for dry runs and tests.
    
    Objects are kept in a dict keyed by storage key. Signed URLs carry a
    counter so two calls never return the same URL, like real signatures
    with a fresh timestamp.
    """
    
    def __init__(self, bucket_name: str = "mock-bucket", region: str = "us-east-1") -> None:
        self.bucket_name = bucket_name
        self.region = region
        self.objects: dict[str, StoredObject] = {}
        self.signed_url_calls = 0
        logger.info("Initialized mock storage client (in-memory)")
    
    async def upload_file(
        self,
        file_path: str,
        key: str,
        content_type: Optional[str] = None,
        public: bool = False,
    ) -> None:
        with open(file_path, 'rb') as f:
            data = f.read()
        await self.upload_bytes(data, key, content_type=content_type, public=public)
    
    async def upload_bytes(
        self,
        data: bytes,
        key: str,
        content_type: Optional[str] = None,
        public: bool = False,
    ) -> None:
        self.objects[key] = StoredObject(
            data=data,
            content_type=content_type,
            acl=ACL_PUBLIC if public else ACL_PRIVATE,
        )
        
        logger.debug(
            "Stored object in mock storage",
            extra={"key": key, "size_bytes": len(data)}
        )
    
    async def get_signed_url(self, key: str, expires_in: int) -> str:
        if key not in self.objects:
            raise StorageError(f"Object not found: {key}")
        
        self.signed_url_calls += 1
        return (
            f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"
            f"?X-Amz-Expires={expires_in}&X-Mock-Signature={self.signed_url_calls}"
        )


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_storage_client(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> StorageClient:
    """
    Create storage client based on configuration.
    
    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, return mock client
    
    Returns:
        StorageClient implementation (S3 or Mock)
    """
    if mock_mode:
        if config is None:
            return MockStorageClient()
        return MockStorageClient(config.bucket_name, config.region)
    
    if config is None:
        raise ValueError("config is required when not in mock mode")
    
    return S3StorageClient(config)
