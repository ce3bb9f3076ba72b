"""Client tests for the image generation API.

These tests inject fake aiohttp sessions/responses and record sleeps so the
retry, rate-limit and error mapping branches run without network access.
"""

import asyncio
import base64
import json
from types import SimpleNamespace

import aiohttp
import pytest

from storefront.pipeline.image_generator.client import (
    GeneratedImage,
    ImageAPIClient,
    build_image_payload,
    extract_inline_image,
)


class FakeResponse:
    def __init__(self, status: int, text: str):
        self.status = status
        self._text = text

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, responses):
        self._responses = iter(responses)
        self.calls = []

    def post(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        try:
            return next(self._responses)
        except StopIteration:
            return FakeResponse(500, "{}")


def image_body(mime: str = "image/png", data: bytes = b"PNGDATA") -> str:
    return json.dumps(
        {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {"text": "Here is your image"},
                            {
                                "inlineData": {
                                    "mimeType": mime,
                                    "data": base64.b64encode(data).decode("ascii"),
                                }
                            },
                        ]
                    }
                }
            ]
        }
    )


def make_client(**overrides) -> ImageAPIClient:
    cfg = SimpleNamespace(
        endpoint="https://example.invalid/models/m:generateContent",
        api_key="test-key",
        request_timeout=5,
        max_retries=1,
        backoff_factor=2.0,
        retry_sleep_on_429=1,
    )
    for key, value in overrides.items():
        setattr(cfg, key, value)
    return ImageAPIClient(cfg)


@pytest.fixture
def slept(monkeypatch):
    calls = []

    async def fake_sleep(t):
        calls.append(t)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return calls


@pytest.mark.asyncio
async def test_success_returns_decoded_image(slept):
    session = FakeSession([FakeResponse(200, image_body())])
    ok, image, raw = await make_client().generate_image(session, "a lamp")
    assert ok is True
    assert image == GeneratedImage(data=b"PNGDATA", mime_type="image/png")
    assert image.extension == ".png"
    assert raw["candidates"]
    assert slept == []
    _, kwargs = session.calls[0]
    assert kwargs["headers"]["x-goog-api-key"] == "test-key"
    assert kwargs["json"] == build_image_payload("a lamp")


@pytest.mark.asyncio
async def test_rate_limit_429_then_success(slept):
    session = FakeSession([FakeResponse(429, "slow down"), FakeResponse(200, image_body())])
    ok, image, _ = await make_client().generate_image(session, "a lamp")
    assert ok is True and image is not None
    assert slept == [1]


@pytest.mark.asyncio
async def test_rate_limit_exhausted_reports_rate_limit_error(slept):
    session = FakeSession([FakeResponse(429, "slow"), FakeResponse(429, "slow")])
    ok, image, raw = await make_client().generate_image(session, "a lamp")
    assert ok is False and image is None
    assert raw["error_code"] == "API_RATE_LIMIT_ERROR"
    assert raw["is_transient"] is True
    assert slept == [1]


@pytest.mark.asyncio
async def test_429_wait_grows_with_attempt(slept):
    session = FakeSession(
        [FakeResponse(429, ""), FakeResponse(429, ""), FakeResponse(200, image_body())]
    )
    ok, _, _ = await make_client(max_retries=2, retry_sleep_on_429=10).generate_image(
        session, "x"
    )
    assert ok is True
    assert slept == [10, 20]


@pytest.mark.asyncio
async def test_missing_image_part_is_retried(slept):
    no_image = json.dumps({"candidates": [{"content": {"parts": [{"text": "sorry"}]}}]})
    session = FakeSession([FakeResponse(200, no_image), FakeResponse(200, image_body())])
    ok, image, _ = await make_client().generate_image(session, "x")
    assert ok is True and image is not None
    assert slept == [1.0]


@pytest.mark.asyncio
async def test_no_candidates_after_retries(slept):
    session = FakeSession([FakeResponse(200, "{}"), FakeResponse(200, "{}")])
    ok, image, raw = await make_client().generate_image(session, "x")
    assert ok is False and image is None and raw == {}


@pytest.mark.asyncio
async def test_server_error_retries_then_fails(slept):
    session = FakeSession([FakeResponse(500, "ERR"), FakeResponse(503, "ERR")])
    ok, image, raw = await make_client().generate_image(session, "x")
    assert ok is False and image is None
    assert raw == {"status_code": 503, "error_body": "ERR"}
    assert slept == [1.0]


@pytest.mark.asyncio
async def test_invalid_json_body(slept):
    session = FakeSession([FakeResponse(200, "<html>")])
    ok, _, raw = await make_client().generate_image(session, "x")
    assert ok is False and raw == {"raw_response_text": "<html>"}


@pytest.mark.asyncio
async def test_client_error(slept):
    class ErrorSession:
        def post(self, *args, **kwargs):
            raise aiohttp.ClientError("network down")

    ok, image, raw = await make_client().generate_image(ErrorSession(), "x")
    assert ok is False and image is None and raw["error_type"] == "ClientError"
    assert slept == [1.0]


@pytest.mark.asyncio
async def test_timeout_error(slept):
    class TimeoutSession:
        def post(self, *args, **kwargs):
            class Ctx:
                async def __aenter__(self_inner):
                    raise TimeoutError()

                async def __aexit__(self_inner, exc_type, exc, tb):
                    return False

            return Ctx()

    ok, _, raw = await make_client(max_retries=0).generate_image(TimeoutSession(), "x")
    assert ok is False and raw == {"error_type": "TimeoutError"}


@pytest.mark.asyncio
async def test_missing_endpoint_sends_nothing(slept):
    session = FakeSession([])
    ok, _, raw = await make_client(endpoint="").generate_image(session, "x")
    assert ok is False and raw["error_type"] == "ConfigurationError"
    assert session.calls == []


def test_extract_inline_image_rejects_bad_base64():
    data = {"candidates": [{"content": {"parts": [{"inlineData": {"data": "!!!"}}]}}]}
    assert extract_inline_image(data) is None


def test_generated_image_extension_defaults_to_jpg():
    assert GeneratedImage(b"", "image/jpeg").extension == ".jpg"
    assert GeneratedImage(b"", "image/webp").extension == ".jpg"
    assert GeneratedImage(b"", "IMAGE/PNG").extension == ".png"
