"""Image generator pipeline package.

Public API of the image stage: environment-backed configuration, the
resilient API client, per-role prompts and the batch processor.
"""

from .client import GeneratedImage, ImageAPIClient, build_image_payload, extract_inline_image
from .config import ImageGenConfig
from .processor import SiteImageProcessor, find_existing_stems
from .prompts import ImagePrompt, build_image_prompts

__all__ = [
    "GeneratedImage",
    "ImageAPIClient",
    "ImageGenConfig",
    "ImagePrompt",
    "SiteImageProcessor",
    "build_image_payload",
    "build_image_prompts",
    "extract_inline_image",
    "find_existing_stems",
]
