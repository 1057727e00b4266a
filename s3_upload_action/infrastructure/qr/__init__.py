from .renderer import QRCodeRenderer

__all__ = ["QRCodeRenderer"]
