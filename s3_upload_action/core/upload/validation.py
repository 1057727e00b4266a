"""
Input validation and normalization.

Turns the raw string inputs into an UploadRequest. Everything here runs
before the first network call, so a bad input never leaves a half-finished
upload behind.
"""

import logging
import mimetypes
import secrets
import string
from pathlib import Path
from typing import Optional

from .models import (
    DEFAULT_BUCKET_ROOT,
    EXPIRE_MAX,
    EXPIRE_MIN,
    QR_WIDTH_MAX,
    QR_WIDTH_MIN,
    InputValidationError,
    UploadInputs,
    UploadRequest,
)

logger = logging.getLogger(__name__)

RANDOM_DIR_LENGTH = 32
_RANDOM_DIR_ALPHABET = string.ascii_letters + string.digits


def _parse_int(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except (AttributeError, ValueError):
        return None


def parse_expire(raw: str) -> int:
    """Parse the `expire` input: seconds between 0 and 604800 (7 days)."""
    value = _parse_int(raw)
    if value is None or value < EXPIRE_MIN or value > EXPIRE_MAX:
        raise InputValidationError(
            f'"expire" input should be a number between {EXPIRE_MIN} and {EXPIRE_MAX}.'
        )
    return value


def parse_qr_width(raw: str) -> int:
    """Parse the `qr-width` input: pixels between 100 and 1000. Zero is rejected too."""
    value = _parse_int(raw)
    if not value or value < QR_WIDTH_MIN or value > QR_WIDTH_MAX:
        raise InputValidationError(
            f'"qr-width" input should be a number between {QR_WIDTH_MIN} and {QR_WIDTH_MAX}.'
        )
    return value


def parse_flag(raw: str) -> bool:
    return raw.strip().lower() == "true"


def normalize_prefix(value: str) -> str:
    """
    Normalize a path-like prefix.
    
    Strips one leading slash and appends a trailing slash when missing.
    An empty result stays empty.
    """
    if value.startswith("/"):
        value = value[1:]
    if value and not value.endswith("/"):
        value = value + "/"
    return value


def random_dir_name(length: int = RANDOM_DIR_LENGTH) -> str:
    """Random alphanumeric name used to keep separate runs apart in the bucket."""
    return "".join(secrets.choice(_RANDOM_DIR_ALPHABET) for _ in range(length))


def resolve_bucket_root(raw: str) -> str:
    return normalize_prefix(raw) if raw else DEFAULT_BUCKET_ROOT


def resolve_destination_dir(raw: str) -> str:
    return normalize_prefix(raw) if raw else random_dir_name() + "/"


def resolve_content_type(raw: str, file_path: str) -> Optional[str]:
    """Explicit content type wins; otherwise guess from the file name."""
    if raw:
        return raw
    guessed, _ = mimetypes.guess_type(file_path)
    return guessed


def build_request(inputs: UploadInputs) -> UploadRequest:
    """
    Validate raw inputs and build the request for this run.
    
    Raises:
        InputValidationError: if expire or qr-width is out of range, or the
            source file does not exist.
    """
    expire = parse_expire(inputs.expire)
    qr_width = parse_qr_width(inputs.qr_width)
    
    if not Path(inputs.file_path).is_file():
        raise InputValidationError(f"File not found: {inputs.file_path}")
    
    request = UploadRequest(
        aws_access_key_id=inputs.aws_access_key_id,
        aws_secret_access_key=inputs.aws_secret_access_key,
        region=inputs.aws_region,
        bucket=inputs.aws_bucket,
        file_path=inputs.file_path,
        bucket_root=resolve_bucket_root(inputs.bucket_root),
        destination_dir=resolve_destination_dir(inputs.destination_dir),
        content_type=resolve_content_type(inputs.content_type, inputs.file_path),
        is_public=parse_flag(inputs.public),
        expire=expire,
        qr_width=qr_width,
        output_file_url=parse_flag(inputs.output_file_url),
        output_qr_url=parse_flag(inputs.output_qr_url),
        alternative_domain_public=inputs.alternative_domain_public,
        alternative_domain_private=inputs.alternative_domain_private,
    )
    
    logger.debug(
        "Built upload request",
        extra={
            "bucket": request.bucket,
            "bucket_root": request.bucket_root,
            "destination_dir": request.destination_dir,
            "public": request.is_public,
            "expire": request.expire,
        }
    )
    
    return request
