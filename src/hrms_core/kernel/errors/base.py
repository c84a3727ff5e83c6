"""Root error class for the hrms-core error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    ``message`` is safe to show to an end user and falls back to the
    class's ``default_message``; ``code`` is the stable slug
    callers branch on. ``detail`` carries context for logs, such as the raw
    backend code a mapped error came from. *cause* becomes ``__cause__``.
    """

    default_code: str = "base_error"
    default_message: str = "Unexpected error"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}: {self.message})"


__all__ = ["BaseError"]
