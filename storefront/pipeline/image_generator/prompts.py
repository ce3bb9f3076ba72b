"""Image prompts for the nine image roles of a site.

Prompt names are the canonical file stems the site assembler probes for in
``<site>/images``, so a generated ``hero.png`` is picked up as ``image_hero``.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.config import IMAGE_ROLES


@dataclass(frozen=True)
class ImagePrompt:
    """A canonical image name and the text prompt that produces it."""

    name: str
    prompt: str


_PROMPT_FORMATS: dict[str, str] = {
    "hero": (
        "Wide landscape hero banner photo for an e-commerce website selling "
        "{keyword}. Modern, aspirational lifestyle photography. Clean, bright, "
        "professional. The image should evoke quality and trust. No text overlay."
    ),
    "product-main": (
        "Professional product photography of a {product_name}. Clean white "
        "background, studio lighting, high-end e-commerce style. Sharp detail, "
        "centered composition. No text."
    ),
    "product-2": (
        "Product photo of a {keyword} from a different angle, showing details and "
        "build quality. Clean white background, studio lighting, e-commerce "
        "product photography. No text."
    ),
    "product-3": (
        "Close-up detail shot of a {keyword}, highlighting texture, materials, and "
        "craftsmanship. Clean background, macro product photography style. No text."
    ),
    "product-4": (
        "Lifestyle photo of a {keyword} in use in a real home setting. Natural "
        "lighting, modern interior, aspirational but realistic. No text."
    ),
    "product-5": (
        "Product photo of a premium {keyword} accessory or variation. Clean white "
        "background, studio lighting, e-commerce style. No text."
    ),
    "collection-1": (
        "Collection banner image for {keyword} products. Moody, editorial style "
        "with dramatic lighting. Shows multiple product variations artfully "
        "arranged. Vertical aspect ratio. No text."
    ),
    "collection-2": (
        "Flat lay arrangement of {keyword} products and accessories on a clean "
        "surface. Overhead shot, organized layout, e-commerce collection style. "
        "No text."
    ),
    "blog-hero": (
        "Wide cinematic hero image related to {keyword}. Editorial photography "
        "style, suitable for a blog article header. Atmospheric, high-quality, "
        "storytelling composition. No text."
    ),
}


def build_image_prompts(row: dict[str, str]) -> list[ImagePrompt]:
    """Return one prompt per image role, in role order.

    ``product_name`` falls back to ``primary_keyword`` when empty.
    """
    keyword = row.get("primary_keyword", "")
    product_name = row.get("product_name") or keyword
    return [
        ImagePrompt(
            name=name,
            prompt=_PROMPT_FORMATS[name].format(keyword=keyword, product_name=product_name),
        )
        for name in IMAGE_ROLES.values()
    ]
