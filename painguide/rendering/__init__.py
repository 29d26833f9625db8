"""HTML assembly and browser rasterization."""

from .browser_pool import BrowserPool
from .rasterizer import rasterize, wait_for_images
from .template import build_document

__all__ = ["BrowserPool", "build_document", "rasterize", "wait_for_images"]
