# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response body decoders and JSON body encoding.

A decoder is any callable taking the raw response text and returning a value. It reports a
structural problem by raising `DecodeError` (or `ValueError`, `TypeError`, `KeyError`); the
dispatcher turns that into a BAD_BODY failure using the exception message as description.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)

DECODE_FAILURES: tuple[type[Exception], ...] = (ValueError, TypeError, KeyError)


class DecodeError(ValueError):
    """Raised by decoders when the payload does not have the expected structure."""


class Decoder(Protocol[A_co]):
    def __call__(self, text: str) -> A_co: ...


def describe_decode_failure(exc: Exception) -> str:
    if isinstance(exc, json.JSONDecodeError):
        return f"Invalid JSON: {exc}"
    if isinstance(exc, KeyError):
        return f"Missing field: {exc.args[0]!r}" if exc.args else "Missing field"
    return str(exc) or type(exc).__name__


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(describe_decode_failure(exc)) from exc


def text(raw: str) -> str:
    return raw


def json_value(raw: str) -> Any:
    """Decode any JSON document."""
    return _load_json(raw)


def json_decoder(convert: Callable[[Any], A]) -> Decoder[A]:
    """Decode JSON, then hand the parsed value to `convert`."""

    def decode(raw: str) -> A:
        return convert(_load_json(raw))

    return decode


def json_object(factory: Callable[..., A]) -> Decoder[A]:
    """Decode a JSON object and build `factory(**fields)` from it (dataclasses work directly)."""

    def decode(raw: str) -> A:
        obj = _load_json(raw)
        if not isinstance(obj, dict):
            raise DecodeError(f"Expected a JSON object, got {type(obj).__name__}")
        try:
            return factory(**obj)
        except TypeError as exc:
            raise DecodeError(str(exc)) from exc

    return decode


def json_list(item: Callable[[Any], A]) -> Decoder[list[A]]:
    """Decode a JSON array, converting each element with `item`."""

    def decode(raw: str) -> list[A]:
        obj = _load_json(raw)
        if not isinstance(obj, list):
            raise DecodeError(f"Expected a JSON array, got {type(obj).__name__}")
        out: list[A] = []
        for index, element in enumerate(obj):
            try:
                out.append(item(element))
            except DECODE_FAILURES as exc:
                raise DecodeError(f"Element {index}: {describe_decode_failure(exc)}") from exc
        return out

    return decode


def encode_json_body(value: Any) -> bytes:
    """
    Serialize a request body as compact UTF-8 JSON.

    NaN and Infinity have no JSON spelling and raise ValueError; unserializable values raise
    TypeError. Both surface before any request is issued.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


__all__ = [
    "DECODE_FAILURES",
    "DecodeError",
    "Decoder",
    "describe_decode_failure",
    "encode_json_body",
    "json_decoder",
    "json_list",
    "json_object",
    "json_value",
    "text",
]
