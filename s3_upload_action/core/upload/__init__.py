"""
Upload flow: validation, key building, URL resolution and orchestration.
"""

from .models import (
    ConfigurationError,
    InputValidationError,
    UploadError,
    UploadInputs,
    UploadOutcome,
    UploadRequest,
)
from .orchestrator import UploadOrchestrator
from .validation import build_request

__all__ = [
    "ConfigurationError",
    "InputValidationError",
    "UploadError",
    "UploadInputs",
    "UploadOutcome",
    "UploadRequest",
    "UploadOrchestrator",
    "build_request",
]
