"""
Action input providers.

The runner exposes each input as an environment variable named
INPUT_<NAME>, upper-cased with spaces replaced by underscores (dashes are
kept). Local mode skips all that and uses fixed defaults that upload the
README, which is handy for trying the tool against a real bucket.
"""

import logging
import os
from typing import Mapping, Optional, Protocol

from ...config.settings import Settings
from ...core.upload.models import (
    INPUT_NAMES,
    REQUIRED_INPUTS,
    ConfigurationError,
    InputValidationError,
    UploadInputs,
)

logger = logging.getLogger(__name__)


class InputProvider(Protocol):
    """Retrieves one named string input."""
    
    def get_input(self, name: str, required: bool = False) -> str:
        ...


class ActionsInputProvider:
    """Reads inputs the way the Actions runner passes them."""
    
    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ
    
    @staticmethod
    def env_name(name: str) -> str:
        return "INPUT_" + name.replace(" ", "_").upper()
    
    def get_input(self, name: str, required: bool = False) -> str:
        value = self._environ.get(self.env_name(name), "").strip()
        if required and not value:
            raise InputValidationError(f"Input required and not supplied: {name}")
        return value


class LocalInputProvider:
    """
    Fixed inputs for running outside the runner.
    
    Credentials and bucket come from settings (AWS_* env vars or .env);
    everything else is hardcoded.
    """
    
    DEFAULTS = {
        "file-path": "./README.md",
        "destination-dir": "",
        "bucket-root": "",
        "output-file-url": "true",
        "content-type": "",
        "output-qr-url": "true",
        "qr-width": "120",
        "public": "false",
        "expire": "180",
        "alternative-domain-public": "",
        "alternative-domain-private": "",
    }
    
    def __init__(self, settings: Settings) -> None:
        missing = settings.validate_required_fields()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        
        self._values = dict(self.DEFAULTS)
        self._values.update({
            "aws-access-key-id": settings.aws_access_key_id,
            "aws-secret-access-key": settings.aws_secret_access_key,
            "aws-region": settings.aws_region,
            "aws-bucket": settings.aws_bucket or (
                "mock-bucket" if settings.storage_mock_mode else ""
            ),
        })
    
    def get_input(self, name: str, required: bool = False) -> str:
        return self._values.get(name, "")


def read_inputs(provider: InputProvider) -> UploadInputs:
    """Collect every action input from the provider into UploadInputs."""
    values = {
        name.replace("-", "_"): provider.get_input(name, required=name in REQUIRED_INPUTS)
        for name in INPUT_NAMES
    }
    
    logger.debug(
        "Read action inputs",
        extra={"provided": sorted(k for k, v in values.items() if v and "secret" not in k)}
    )
    
    return UploadInputs(**values)
