"""Local error taxonomy for transit-synth.

The library is pure compute. It keeps a small, stable error enum/envelope
that downstream pipelines can translate into their own error formats.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    INVALID_PARAMETER = "INVALID_PARAMETER"
    INVALID_DATA = "INVALID_DATA"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ErrorType
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


def make_error(error_type: ErrorType, message: str, **context: Any) -> ErrorEnvelope:
    return ErrorEnvelope(type=error_type, message=message, context=dict(context))


class InvalidParameterError(ValueError):
    """Raised when a model or time sequence cannot be used for synthesis.

    Raised before any per-sample computation starts, so a failed call never
    produces a partial light curve.

    Attributes:
        envelope: Structured description of the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: ErrorType = ErrorType.INVALID_PARAMETER,
        **context: Any,
    ) -> None:
        self.envelope = make_error(error_type, message, **context)
        super().__init__(message)

    @property
    def error_type(self) -> ErrorType:
        return self.envelope.type

    @property
    def context(self) -> dict[str, Any]:
        return self.envelope.context
