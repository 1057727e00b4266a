"""
S3 Upload Action - upload one file to S3 from a pipeline step.

This package contains the complete tool:
- core: Framework-agnostic upload flow (validation, keys, URLs, orchestration)
- infrastructure: External integrations (S3, QR rendering, Actions runner I/O)
- config: Settings loaded from the environment
"""

__version__ = "0.1.0"
