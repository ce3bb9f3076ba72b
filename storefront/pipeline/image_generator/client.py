"""image_generator.client module.

This module defines ``ImageAPIClient``, the asynchronous networking boundary
for image generation requests. It posts a text prompt to the configured
``generateContent`` endpoint, retries transient failures, and extracts the
first inline image from the response.

The client performs no file I/O and does not raise: every call returns an
``(ok, image, raw)`` tuple so the processor decides what a failure means for
the site being processed.

Examples
--------
>>> import aiohttp
>>> class DummyConfig:
...     endpoint = "http://example.invalid/models/m:generateContent"
...     api_key = "secret"
...     max_retries = 0
>>> client = ImageAPIClient(DummyConfig())
>>> async def main():
...     async with aiohttp.ClientSession() as session:
...         ok, image, raw = await client.generate_image(session, "a red chair")
...         print(ok, image is None)
>>> # import asyncio; asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from storefront.exceptions import APIRateLimitError

logger = logging.getLogger(__name__)

_MIME_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
}


@dataclass(frozen=True)
class GeneratedImage:
    """Decoded image bytes and the mime type reported by the API."""

    data: bytes
    mime_type: str

    @property
    def extension(self) -> str:
        """File extension for the mime type; anything but PNG is stored as JPEG."""
        return _MIME_EXTENSIONS.get(self.mime_type.lower(), ".jpg")


def build_image_payload(prompt: str) -> dict[str, Any]:
    """Return the ``generateContent`` request body asking for text and image output."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
    }


def extract_inline_image(data: dict[str, Any]) -> GeneratedImage | None:
    """Return the first inline image of the first candidate, if any.

    Parameters
    ----------
    data : dict[str, Any]
        Parsed JSON body of a successful response.

    Returns
    -------
    GeneratedImage | None
        ``None`` when there are no candidates, no image part, or the base64
        payload cannot be decoded.
    """
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content", {}) if isinstance(candidates[0], dict) else {}
    for part in content.get("parts", []) or []:
        inline = part.get("inlineData") if isinstance(part, dict) else None
        if not inline or not inline.get("data"):
            continue
        try:
            raw_bytes = base64.b64decode(inline["data"], validate=True)
        except (binascii.Error, ValueError):
            return None
        return GeneratedImage(data=raw_bytes, mime_type=inline.get("mimeType", "image/png"))
    return None


class ImageAPIClient:
    r"""Asynchronous client for the image generation endpoint.

    Attributes
    ----------
    config : Any
        Configuration object (normally ``ImageGenConfig``) providing
        ``endpoint``, ``api_key`` and the retry and timeout limits. Optional
        limits are read with ``getattr`` so test doubles can omit them.

    Notes
    -----
    Rate limiting is not done here; the processor wraps each call in an
    ``aiolimiter.AsyncLimiter``.
    """

    def __init__(self, config: Any) -> None:
        self.config = config

    async def generate_image(
        self, session: aiohttp.ClientSession, prompt: str
    ) -> tuple[bool, GeneratedImage | None, dict[str, Any] | None]:
        r"""Request one image for ``prompt``.

        Handles:
          * a missing endpoint or key (configuration error, no request sent)
          * HTTP 429, sleeping ``retry_sleep_on_429 * (attempt + 1)``
          * responses without candidates or without an image part
          * other HTTP errors, ``aiohttp.ClientError`` and timeouts

        Every failure except 429 sleeps ``backoff_factor ** attempt`` before
        the next attempt, up to ``max_retries`` retries.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Open session; used and not closed.
        prompt : str
            Text prompt describing the image.

        Returns
        -------
        tuple[bool, GeneratedImage | None, dict[str, Any] | None]
            ``(ok, image, raw)`` where ``raw`` is the parsed response body on
            success and a dict describing the failure otherwise.
        """
        endpoint = getattr(self.config, "endpoint", "")
        api_key = getattr(self.config, "api_key", "")
        if not endpoint or not api_key:
            return (
                False,
                None,
                {
                    "error_type": "ConfigurationError",
                    "message": "Image endpoint or API key not set.",
                },
            )

        headers = {"Content-Type": "application/json", "x-goog-api-key": str(api_key)}
        payload = build_image_payload(prompt)
        max_retries = getattr(self.config, "max_retries", 2)
        backoff = getattr(self.config, "backoff_factor", 5.0)
        last_error: dict[str, Any] | None = None

        for attempt in range(max_retries + 1):
            try:
                async with session.post(
                    endpoint,
                    json=payload,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(
                        total=getattr(self.config, "request_timeout", 120)
                    ),
                ) as response:
                    status = response.status
                    text = await response.text()
                    if status == 200:
                        try:
                            data = json.loads(text)
                        except json.JSONDecodeError:
                            return False, None, {"raw_response_text": text}
                        image = extract_inline_image(data)
                        if image is not None:
                            return True, image, data
                        # No image in the response: retry if allowed
                        last_error = data
                        if attempt < max_retries:
                            await asyncio.sleep(backoff**attempt)
                            continue
                        return False, None, data
                    if status == 429:
                        wait = getattr(self.config, "retry_sleep_on_429", 10) * (attempt + 1)
                        logger.warning("Rate limited, waiting %ss...", wait)
                        last_error = APIRateLimitError(
                            "Image API kept returning HTTP 429",
                            context={"attempts": attempt + 1},
                        ).to_dict()
                        if attempt < max_retries:
                            await asyncio.sleep(wait)
                            continue
                        return False, None, last_error
                    if attempt < max_retries:
                        await asyncio.sleep(backoff**attempt)
                        continue
                    return False, None, {"status_code": status, "error_body": text[:500]}
            except aiohttp.ClientError as e:
                if attempt < max_retries:
                    await asyncio.sleep(backoff**attempt)
                    continue
                return False, None, {"error_type": "ClientError", "message": str(e)}
            except TimeoutError:
                if attempt < max_retries:
                    await asyncio.sleep(backoff**attempt)
                    continue
                return False, None, {"error_type": "TimeoutError"}
        return False, None, last_error
