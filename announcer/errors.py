"""
Error types raised by the request handlers.

ValidationError maps to a 400 response, DependencyError to a 500 response.
"""

from typing import Any, Dict, Optional


class ValidationError(Exception):
    """The request broke an input rule. The message names the rule."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DependencyError(Exception):
    """
    A store or notification call failed.

    Args:
        message (str): Generic message returned to the caller.
        cause (Exception): The underlying failure, reported as `error`.
        extra (dict, optional): Additional keys merged into the response body.
    """

    def __init__(self, message: str, cause: BaseException, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra = extra or {}

    def to_body(self) -> Dict[str, Any]:
        body = {"message": self.message, "error": str(self.cause)}
        body.update(self.extra)
        return body
