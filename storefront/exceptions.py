"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used across the storefront pipeline: configuration
problems, malformed input data, operator input errors (missing CSV, unknown
domain filter), and failures of external services (image API, git).
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'DATA_VALIDATION_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and may be retried.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'}, transient=True)
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised by ``ImageGenConfig`` when ``GEMINI_API_KEY`` is not set.

    ``program1_generate_images`` reports it and exits 1 before any request.
    """

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class DataValidationError(AppError):
    """Raised for site data that cannot be interpreted.

    The CSV loader raises it for a document that is not UTF-8 or has no data
    row; ``generate_site`` raises it for a row without a domain, which the
    batch runner records as that row's failure.
    """

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "DATA_VALIDATION_ERROR", message, context=context, transient=False
        )


class UserInputError(AppError):
    """Raised for bad command-line input: a missing CSV, a ``--domain`` that
    matches no row, a missing output directory or an unreadable branch map.
    """

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("USER_INPUT_ERROR", message, context=context, transient=False)


class APIRateLimitError(AppError):
    """Built by ``ImageAPIClient`` for each HTTP 429 from the image API.

    When retries run out, the last one's ``to_dict()`` is returned as the raw
    error payload instead of being raised.
    """

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "API_RATE_LIMIT_ERROR", message, context=context, transient=True
        )


class RetryExhaustedError(AppError):
    """Logged by ``SiteImageProcessor`` when the client gave up on an image."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "RETRY_EXHAUSTED_ERROR", message, context=context, transient=False
        )


class ExternalServiceError(AppError):
    """Raised by ``GitRunner`` when git cannot start or exits non-zero.

    ``SiteDeployer`` records it as the failure of the site being published.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = True,
    ) -> None:
        super().__init__(
            "EXTERNAL_SERVICE_ERROR", message, context=context, transient=transient
        )
