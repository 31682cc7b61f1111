"""Serialization of JSON:API documents."""

from __future__ import annotations

from pydantic_core import PydanticSerializationError

from ..errors import SerializationError
from .document import JsonApiDocument


def serialize_document(document: JsonApiDocument) -> bytes:
    """Render ``document`` as compact UTF-8 JSON.

    Unset optional members are omitted; ``included`` is always emitted, even
    when empty.
    """
    try:
        text = document.model_dump_json(exclude_none=True)
    except PydanticSerializationError as exc:
        raise SerializationError(f"Failed to serialize document: {exc}") from exc
    return text.encode("utf-8")


__all__ = ["serialize_document"]
