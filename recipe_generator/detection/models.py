from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DetectionErrorKind(str, Enum):
    not_configured = "not_configured"
    missing_image = "missing_image"
    unsupported_type = "unsupported_type"
    file_too_large = "file_too_large"
    auth_failed = "auth_failed"
    provider_error = "provider_error"
    network_error = "network_error"
    invalid_response = "invalid_response"
    no_ingredients = "no_ingredients"


class DetectionResult(BaseModel):
    ingredients: list[str] = Field(default_factory=list)
    error: str | None = None
    error_kind: DetectionErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def failure(cls, kind: DetectionErrorKind, message: str) -> "DetectionResult":
        return cls(ingredients=[], error=message, error_kind=kind)
