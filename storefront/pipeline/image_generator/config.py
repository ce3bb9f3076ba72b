"""Configuration and environment loader for the image generation client.

``ImageGenConfig`` reads the image API credentials and the retry, rate and
timeout limits from the process environment, after loading an optional
``.env`` file at the project root with python-dotenv. It holds no client
logic.

Examples
--------
>>> import os
>>> os.environ["GEMINI_API_KEY"] = "unit-test"
>>> cfg = ImageGenConfig()
>>> cfg.endpoint.endswith(":generateContent")
True
"""

import os
from pathlib import Path

from dotenv import load_dotenv

import storefront.config as _project_config
from storefront.config import DEFAULT_IMAGE_API_BASE, DEFAULT_IMAGE_MODEL
from storefront.exceptions import ConfigurationError


class ImageGenConfig:
    r"""Validated settings for the image generation API.

    Attributes
    ----------
    api_key : str
        Key sent in the ``x-goog-api-key`` header.
    model : str
        Image model name.
    api_base : str
        Base URI of the generative language API.
    max_retries : int
        Retries for transient failures (network, timeouts, empty responses).
    backoff_factor : float
        Sleep ``backoff_factor ** attempt`` seconds between retries.
    retry_sleep_on_429 : int
        Seconds to sleep per attempt after HTTP 429.
    target_rpm : int
        Requests per minute enforced by the processor's rate limiter.
    max_concurrent_requests : int
        Upper bound on in-flight requests.
    request_timeout : int
        Total timeout (seconds) for one request.
    endpoint : str
        Complete ``generateContent`` URI for the configured model.

    Raises
    ------
    ConfigurationError
        If ``GEMINI_API_KEY`` is not set.
    """

    def __init__(self) -> None:
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=True)
        self.api_key: str = os.getenv("GEMINI_API_KEY", "")
        self.model: str = os.getenv("IMAGE_MODEL", DEFAULT_IMAGE_MODEL)
        self.api_base: str = os.getenv("IMAGE_API_BASE", DEFAULT_IMAGE_API_BASE)
        self.max_retries = int(os.getenv("MAX_RETRIES", 2))
        self.backoff_factor = float(os.getenv("BACKOFF_FACTOR", 5.0))
        self.retry_sleep_on_429 = int(os.getenv("RETRY_SLEEP_ON_429", 10))
        self.target_rpm = int(os.getenv("TARGET_RPM", 20))
        self.max_concurrent_requests = int(os.getenv("MAX_CONCURRENT_REQUESTS", 1))
        self.request_timeout = int(os.getenv("REQUEST_TIMEOUT", 120))
        if not self.api_key:
            raise ConfigurationError(
                "Missing GEMINI_API_KEY environment variable for image generation"
            )
        self.endpoint = (
            f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"
        )
