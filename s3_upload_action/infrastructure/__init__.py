"""
Infrastructure layer - external integrations.

Each subdirectory wraps an external dependency:
- storage: S3 object storage (boto3)
- qr: QR code rendering (qrcode + Pillow)
- actions: Actions runner inputs and outputs
"""
