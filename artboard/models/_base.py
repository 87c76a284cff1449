from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ArtModel(BaseModel):
    """Immutable base model; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["ArtModel"]
