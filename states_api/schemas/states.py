"""State Schemas — Pydantic request bodies for the fun fact endpoints.

Invariants:
    - FunFactsCreate.funfacts is required and must be a list of strings
    - FunFactUpdate / FunFactDelete fields are optional at the schema level:
      missing fields are reported by the service as BadRequestError with a
      human-readable message instead of a field-by-field validation dump

Design Decisions:
    - index typed as int: non-integer values fail validation (400) before reaching the store
"""

from pydantic import BaseModel, field_validator


class FunFactsCreate(BaseModel):
    """POST body: facts to append, in submitted order."""
    funfacts: list[str]


class FunFactUpdate(BaseModel):
    """PATCH body: 1-based position and replacement text."""
    index: int | None = None
    funfact: str | None = None

    @field_validator("funfact")
    @classmethod
    def blank_as_missing(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class FunFactDelete(BaseModel):
    """DELETE body: 1-based position to remove."""
    index: int | None = None
