"""Storage key construction. Names are used verbatim, no escaping."""

import os

from .models import QR_FILENAME


def build_file_key(bucket_root: str, destination_dir: str, file_path: str) -> str:
    return bucket_root + destination_dir + os.path.basename(file_path)


def build_qr_key(bucket_root: str, destination_dir: str) -> str:
    return bucket_root + destination_dir + QR_FILENAME
