"""
Application configuration using Pydantic settings.

Only process-level configuration lives here: which mode we run in, where
the runner wants outputs written, and local-mode credentials. Action inputs
(bucket root, visibility, QR width...) come from an InputProvider instead,
because the Actions runner hands them over as INPUT_* variables.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables (and an optional .env file).
    """
    
    app_env: str = Field(
        default="action",
        description="Set to 'local' to run outside the Actions runner with fixed local inputs."
    )
    
    # Local mode credentials (the runner passes these as action inputs instead)
    aws_access_key_id: str = Field(
        default="",
        description="AWS access key ID. Required in local mode."
    )
    aws_secret_access_key: str = Field(
        default="",
        description="AWS secret access key. Required in local mode."
    )
    aws_bucket: str = Field(
        default="",
        description="Target bucket. Required in local mode."
    )
    aws_region: str = Field(
        default="ap-northeast-1",
        description="Region used in local mode."
    )
    
    storage_mock_mode: bool = Field(
        default=False,
        description="Use in-memory storage instead of S3. Enables dry runs without credentials."
    )
    qr_temp_path: str = Field(
        default="./s3-upload-action-qr.png",
        description="Where the QR image is rendered before upload. Removed after each run."
    )
    github_output: Optional[str] = Field(
        default=None,
        description="File the runner reads step outputs from (set by the runner)."
    )
    
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    @property
    def is_local(self) -> bool:
        return self.app_env.strip().lower() == "local"
    
    def validate_required_fields(self) -> list[str]:
        """
        Return the environment variables local mode needs but doesn't have.
        
        Action mode gets its credentials from inputs, and mock storage
        needs none, so both report nothing missing.
        """
        missing = []
        
        if not self.is_local or self.storage_mock_mode:
            return missing
        
        if not self.aws_access_key_id:
            missing.append("AWS_ACCESS_KEY_ID")
        if not self.aws_secret_access_key:
            missing.append("AWS_SECRET_ACCESS_KEY")
        if not self.aws_bucket:
            missing.append("AWS_BUCKET")
        
        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    
    Settings are read once per process. For tests, call
    get_settings.cache_clear() to reset.
    """
    return Settings()
