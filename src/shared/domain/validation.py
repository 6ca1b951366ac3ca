"""Structured validation outcome for expected, recoverable rejections.

A ``ValidationResult`` is returned (never raised) and must be checked by
the caller through ``is_valid``.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class ValidationFailure(BaseModel):
    """A single named failure."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class ValidationResult(BaseModel):
    """Immutable collection of failures; empty when valid."""

    model_config = ConfigDict(frozen=True)

    errors: List[ValidationFailure] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [failure.message for failure in self.errors]
