"""
Entry point for the upload action.

Everything the run needs (settings, input provider, output sink, storage
client) is built once here and passed down; nothing below this module reads
the environment.

In a workflow step:
    python -m s3_upload_action

Locally, against a real bucket:
    APP_ENV=local AWS_ACCESS_KEY_ID=... AWS_SECRET_ACCESS_KEY=... AWS_BUCKET=... \
        python -m s3_upload_action

Dry run without a bucket:
    APP_ENV=local STORAGE_MOCK_MODE=true python -m s3_upload_action
"""

import asyncio
import logging
import sys
from typing import Optional

from .config.settings import Settings, get_settings
from .core.upload.models import UploadOutcome
from .core.upload.orchestrator import OutputSink, UploadOrchestrator
from .core.upload.validation import build_request
from .infrastructure.actions.inputs import (
    ActionsInputProvider,
    InputProvider,
    LocalInputProvider,
    read_inputs,
)
from .infrastructure.actions.outputs import ActionsOutputSink, ConsoleOutputSink
from .infrastructure.qr.renderer import QRCodeRenderer
from .infrastructure.storage.client import StorageConfig, create_storage_client

logger = logging.getLogger(__name__)

RESULT_SUCCESS = "success"
RESULT_FAILURE = "failure"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        stream=sys.stderr,
    )


def create_sink(settings: Settings) -> OutputSink:
    if settings.is_local:
        return ConsoleOutputSink()
    return ActionsOutputSink(settings.github_output)


def create_input_provider(settings: Settings) -> InputProvider:
    """Local mode uses fixed inputs; otherwise read what the runner passed."""
    if settings.is_local:
        return LocalInputProvider(settings)
    return ActionsInputProvider()


async def execute(
    settings: Settings,
    provider: InputProvider,
    sink: OutputSink,
) -> UploadOutcome:
    """Validate inputs, then run the upload flow."""
    request = build_request(read_inputs(provider))
    
    storage = create_storage_client(
        StorageConfig(
            access_key_id=request.aws_access_key_id,
            secret_access_key=request.aws_secret_access_key,
            bucket_name=request.bucket,
            region=request.region,
        ),
        mock_mode=settings.storage_mock_mode,
    )
    
    orchestrator = UploadOrchestrator(
        storage=storage,
        renderer=QRCodeRenderer(),
        sink=sink,
        qr_temp_path=settings.qr_temp_path,
    )
    return await orchestrator.run(request)


def run(
    settings: Settings,
    provider: Optional[InputProvider] = None,
    sink: Optional[OutputSink] = None,
) -> int:
    """
    Run once and report the outcome. Returns the process exit code.
    
    Any exception is turned into `result=failure` plus the failure marker
    carrying the error's message.
    """
    if sink is None:
        sink = create_sink(settings)
    
    try:
        if provider is None:
            provider = create_input_provider(settings)
        
        outcome = asyncio.run(execute(settings, provider, sink))
    except Exception as e:
        logger.error(
            "Upload failed",
            extra={"error": str(e), "error_type": type(e).__name__},
            exc_info=settings.log_level.upper() == "DEBUG",
        )
        sink.set_output("result", RESULT_FAILURE)
        sink.set_failed(str(e))
        return 1
    
    sink.set_output("result", RESULT_SUCCESS)
    logger.info(
        "Upload finished",
        extra={"key": outcome.file_key, "outputs": sorted(outcome.outputs)}
    )
    return 0


def cli() -> None:
    settings = get_settings()
    configure_logging(settings)
    sys.exit(run(settings))


if __name__ == "__main__":
    cli()
