"""
Domain models for a single upload run.

Everything here lives for one invocation only. Nothing is persisted locally;
the bucket is the only place results end up.
"""

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_BUCKET_ROOT = "artifacts/"
QR_FILENAME = "qr.png"
QR_CONTENT_TYPE = "image/png"

EXPIRE_MIN = 0
EXPIRE_MAX = 604800  # 7 days
QR_WIDTH_MIN = 100
QR_WIDTH_MAX = 1000

# Signed URLs are meant to be opened right away. This window is not the
# `expire` input; the two are kept separate on purpose.
SIGNED_URL_TTL_SECONDS = 10 * 60

# Action input names, as declared in action.yml
INPUT_NAMES = (
    "aws-access-key-id",
    "aws-secret-access-key",
    "aws-region",
    "aws-bucket",
    "file-path",
    "destination-dir",
    "bucket-root",
    "output-file-url",
    "content-type",
    "output-qr-url",
    "qr-width",
    "public",
    "expire",
    "alternative-domain-public",
    "alternative-domain-private",
)
REQUIRED_INPUTS = frozenset({
    "aws-access-key-id",
    "aws-secret-access-key",
    "aws-region",
    "aws-bucket",
    "file-path",
})


class UploadError(Exception):
    """Base class for errors raised by the upload flow itself."""
    pass


class InputValidationError(UploadError):
    """Raised when an input is missing or out of range, before any upload."""
    pass


class ConfigurationError(UploadError):
    """Raised when process configuration (local mode credentials) is incomplete."""
    pass


@dataclass(frozen=True)
class UploadInputs:
    """
    Raw action inputs, exactly as strings.
    
    Field names mirror the kebab-case input names with underscores.
    """
    aws_access_key_id: str
    aws_secret_access_key: str
    aws_region: str
    aws_bucket: str
    file_path: str
    destination_dir: str = ""
    bucket_root: str = ""
    output_file_url: str = ""
    content_type: str = ""
    output_qr_url: str = ""
    qr_width: str = ""
    public: str = ""
    expire: str = ""
    alternative_domain_public: str = ""
    alternative_domain_private: str = ""


@dataclass(frozen=True)
class UploadRequest:
    """
    A validated, normalized upload request.
    
    Frozen because it is built once at the start of the run and only read
    afterwards. bucket_root and destination_dir are already normalized:
    no leading slash, exactly one trailing slash.
    """
    aws_access_key_id: str
    aws_secret_access_key: str
    region: str
    bucket: str
    file_path: str
    bucket_root: str
    destination_dir: str
    content_type: Optional[str]
    is_public: bool
    expire: int
    qr_width: int
    output_file_url: bool
    output_qr_url: bool
    alternative_domain_public: str = ""
    alternative_domain_private: str = ""
    
    @property
    def wants_url(self) -> bool:
        """The file URL is needed for the file-url output or to render the QR."""
        return self.output_file_url or self.output_qr_url


@dataclass
class UploadOutcome:
    """What a run produced. Outputs are recorded in the order they were emitted."""
    file_key: str
    file_url: Optional[str] = None
    qr_key: Optional[str] = None
    qr_url: Optional[str] = None
    outputs: dict[str, str] = field(default_factory=dict)
