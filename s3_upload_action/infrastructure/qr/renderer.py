"""
QR code rendering with the qrcode library.

The image is scaled to exactly the requested width so the `qr-width`
input means the same thing whatever the payload length.
"""

import logging
from pathlib import Path

import qrcode
from PIL import Image

logger = logging.getLogger(__name__)


class QRCodeRenderer:
    """Renders payloads as black-on-white PNG QR codes."""
    
    def __init__(self, border: int = 4) -> None:
        """
        Args:
            border: Quiet zone width in modules. 4 is the minimum the
                QR standard allows.
        """
        self._border = border
    
    async def render(self, path: Path, payload: str, width: int) -> None:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=1,
            border=self._border,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        
        image = qr.make_image(fill_color="black", back_color="white").get_image()
        # nearest neighbour keeps module edges sharp
        image = image.convert("RGB").resize((width, width), Image.Resampling.NEAREST)
        image.save(path, format="PNG")
        
        logger.debug(
            "Rendered QR code",
            extra={"path": str(path), "width": width, "version": qr.version}
        )
