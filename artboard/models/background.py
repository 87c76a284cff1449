"""
Background source reference for an art document.

A `Background` is exactly one of:
  - blank: no background content
  - url: content that must be fetched from a network or file location
  - image_data: image bytes already resident in memory

The variant is carried by `kind` and its payload by `value`; validation
rejects any payload that does not belong to the kind. Values are frozen and
replaced wholesale whenever the background changes.
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum
from typing import Any, Optional, Union

from pydantic import field_serializer, model_validator

from ._base import ArtModel


class BackgroundKind(str, Enum):
    BLANK = "blank"
    URL = "url"
    IMAGE_DATA = "image_data"


class Background(ArtModel):
    kind: BackgroundKind = BackgroundKind.BLANK
    value: Union[bytes, str, None] = None

    # ----- Constructors -----

    @classmethod
    def blank(cls) -> "Background":
        return cls()

    @classmethod
    def empty(cls) -> "Background":
        return cls.blank()

    @classmethod
    def remote(cls, url: str) -> "Background":
        return cls(kind=BackgroundKind.URL, value=url)

    @classmethod
    def inline(cls, data: Union[bytes, bytearray, memoryview]) -> "Background":
        return cls(kind=BackgroundKind.IMAGE_DATA, value=bytes(data))

    # ----- Projections -----

    @property
    def url(self) -> Optional[str]:
        if self.kind is BackgroundKind.URL:
            return self.value  # type: ignore[return-value]
        return None

    @property
    def image_data(self) -> Optional[bytes]:
        if self.kind is BackgroundKind.IMAGE_DATA:
            return self.value  # type: ignore[return-value]
        return None

    def as_url(self) -> Optional[str]:
        return self.url

    def as_bytes(self) -> Optional[bytes]:
        return self.image_data

    @property
    def is_blank(self) -> bool:
        return self.kind is BackgroundKind.BLANK

    @property
    def is_remote(self) -> bool:
        return self.kind is BackgroundKind.URL

    @property
    def is_inline(self) -> bool:
        return self.kind is BackgroundKind.IMAGE_DATA

    # ----- Validation / serialization -----

    @model_validator(mode="before")
    @classmethod
    def _decode_json_payload(cls, data: Any) -> Any:
        # JSON carries image bytes as base64 text
        if not isinstance(data, dict):
            return data
        value = data.get("value")
        if data.get("kind") in (BackgroundKind.IMAGE_DATA, "image_data") and isinstance(
            value, str
        ):
            try:
                return {**data, "value": base64.b64decode(value, validate=True)}
            except binascii.Error as e:
                raise ValueError(f"image_data payload is not base64: {e}") from e
        return data

    @model_validator(mode="after")
    def _check_payload(self) -> "Background":
        if self.kind is BackgroundKind.BLANK:
            if self.value is not None:
                raise ValueError("blank background carries no payload")
        elif self.kind is BackgroundKind.URL:
            if not isinstance(self.value, str) or not self.value:
                raise ValueError("url background requires a non-empty URL string")
        elif not isinstance(self.value, bytes):
            raise ValueError("image_data background requires bytes")
        return self

    @field_serializer("value", when_used="json")
    def _serialize_value(self, value: Union[bytes, str, None]) -> Optional[str]:
        if isinstance(value, bytes):
            return base64.b64encode(value).decode("ascii")
        return value

    def __repr__(self) -> str:
        if self.kind is BackgroundKind.IMAGE_DATA:
            return f"Background.inline(<{len(self.value or b'')} bytes>)"
        if self.kind is BackgroundKind.URL:
            return f"Background.remote({self.value!r})"
        return "Background.blank()"
