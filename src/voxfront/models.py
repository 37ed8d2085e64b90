"""Shared API data models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response payload for the API health endpoint."""

    status: Literal["ok"]
    version: str
    env: str


class FrontendRequest(BaseModel):
    """Text to run through the front end."""

    text: str = Field(max_length=10_000)
    language: str | None = Field(default=None, min_length=2)
    split: bool = False


class SymbolModel(BaseModel):
    """One phonemizer output symbol."""

    text: str = Field(min_length=1)
    kind: Literal["phone", "grapheme", "punct", "boundary"]
    tone: int | None = Field(default=None, ge=1, le=5)
    stress: int | None = Field(default=None, ge=0, le=2)


class UtteranceResult(BaseModel):
    """Front-end output for one utterance."""

    text: str
    language: str
    language_source: Literal["override", "detected", "default"]
    normalizer_id: str
    normalized: str
    symbols: list[SymbolModel]
    token_ids: list[int]


class UtteranceError(BaseModel):
    """Typed failure for one utterance."""

    text: str
    stage: str
    kind: str
    message: str


class FrontendMetadata(BaseModel):
    vocabulary_size: int = Field(ge=1)
    resources: str
    utterance_count: int = Field(ge=0)


class FrontendResponse(BaseModel):
    """Canonical front-end output schema."""

    metadata: FrontendMetadata
    utterances: list[UtteranceResult]
    errors: list[UtteranceError]
