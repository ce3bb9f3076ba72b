"""SiteImageProcessor: image generation orchestration.

Generates the nine role images of every site row into
``<output>/<domain-slug>/images/``. Images whose stem already exists (in any
extension) are skipped, so reruns only fill the gaps. All networking is
delegated to ``ImageAPIClient``; this module owns file I/O, rate limiting and
the run statistics.

Examples
--------
>>> from storefront.pipeline.image_generator import ImageGenConfig, SiteImageProcessor
>>> processor = SiteImageProcessor(ImageGenConfig(), Path("output"))
>>> # stats = asyncio.run(processor.process_rows(rows))
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import aiohttp
from aiolimiter import AsyncLimiter

from storefront.config import DOMAIN_COLUMN, IMAGES_SUBDIR
from storefront.exceptions import RetryExhaustedError
from storefront.pipeline.site_generator.templating import domain_to_slug

from .client import ImageAPIClient
from .prompts import ImagePrompt, build_image_prompts

logger = logging.getLogger(__name__)


def find_existing_stems(images_dir: Path) -> set[str]:
    """Return the stems of all files already present in ``images_dir``."""
    if not images_dir.is_dir():
        return set()
    return {p.stem for p in images_dir.iterdir() if p.is_file()}


class SiteImageProcessor:
    """Generate missing images for a batch of site rows.

    Parameters
    ----------
    config : Any
        Configuration object (normally ``ImageGenConfig``).
    output_dir : Path
        Root of the generated sites; images land in
        ``<output_dir>/<domain-slug>/images``.
    """

    def __init__(self, config: Any, output_dir: Path) -> None:
        self.config = config
        self.client = ImageAPIClient(config)
        self.output_dir = Path(output_dir)

    def images_dir_for(self, domain: str) -> Path:
        return self.output_dir / domain_to_slug(domain) / IMAGES_SUBDIR

    async def generate_one(
        self,
        session: aiohttp.ClientSession,
        images_dir: Path,
        prompt: ImagePrompt,
        rate_limiter: AsyncLimiter,
        semaphore: asyncio.Semaphore,
    ) -> bool:
        """Request one image and write it as ``<name><ext>``.

        Returns
        -------
        bool
            ``True`` when the image was written.
        """
        async with semaphore:
            async with rate_limiter:
                ok, image, raw = await self.client.generate_image(session, prompt.prompt)
            if not ok or image is None:
                error = RetryExhaustedError(
                    f"No image returned for {images_dir.parent.name}/{prompt.name}",
                    context={"response": raw},
                )
                logger.error("%s", error)
                return False
            try:
                images_dir.mkdir(parents=True, exist_ok=True)
                target = images_dir / f"{prompt.name}{image.extension}"
                target.write_bytes(image.data)
            except OSError as error:
                logger.error(f"Cannot write image {prompt.name} for {images_dir.parent.name}: {error}")
                return False
            logger.info(f"{images_dir.parent.name}: saved {target.name} ({len(image.data) // 1024}KB)")
            return True

    def plan_row(self, row: dict[str, str]) -> tuple[Path, list[ImagePrompt], int]:
        """Return the images dir, the prompts still to generate and the skip count."""
        images_dir = self.images_dir_for(row.get(DOMAIN_COLUMN, ""))
        existing = find_existing_stems(images_dir)
        prompts = build_image_prompts(row)
        pending = [p for p in prompts if p.name not in existing]
        skipped = len(prompts) - len(pending)
        if skipped:
            logger.info(f"{images_dir.parent.name}: skipping {skipped} existing image(s)")
        return images_dir, pending, skipped

    async def process_rows(self, rows: list[dict[str, str]]) -> dict[str, int]:
        """Generate all missing images for ``rows``.

        Rows without a domain are skipped with a warning.

        Returns
        -------
        dict[str, int]
            Counts under ``generated``, ``skipped`` and ``failed``.
        """
        stats = {"generated": 0, "skipped": 0, "failed": 0}
        jobs: list[tuple[Path, ImagePrompt]] = []
        for row in rows:
            if not row.get(DOMAIN_COLUMN):
                logger.warning("Skipping row without a domain")
                continue
            images_dir, pending, skipped = self.plan_row(row)
            stats["skipped"] += skipped
            jobs.extend((images_dir, prompt) for prompt in pending)

        if not jobs:
            logger.info("All images already exist; nothing to generate.")
            return stats

        rate_limiter = AsyncLimiter(getattr(self.config, "target_rpm", 20), 60)
        max_concurrent = getattr(self.config, "max_concurrent_requests", 1)
        semaphore = asyncio.Semaphore(max_concurrent)
        connector = aiohttp.TCPConnector(limit=max_concurrent)
        async with aiohttp.ClientSession(connector=connector) as session:
            results = await asyncio.gather(
                *(
                    self.generate_one(session, images_dir, prompt, rate_limiter, semaphore)
                    for images_dir, prompt in jobs
                )
            )
        stats["generated"] = sum(1 for result in results if result)
        stats["failed"] = len(results) - stats["generated"]
        return stats
