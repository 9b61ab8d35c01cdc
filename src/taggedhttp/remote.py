# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Four-state remote data value.

A request is either not issued yet, in flight, failed with an error, or succeeded with a
decoded value. The dispatcher only produces `Failed` and `Succeeded`; the other two states
belong to whatever state management the caller runs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

E = TypeVar("E")
A = TypeVar("A")
B = TypeVar("B")
F = TypeVar("F")


@dataclass(frozen=True)
class NotAsked:
    pass


@dataclass(frozen=True)
class InFlight:
    pass


@dataclass(frozen=True)
class Failed(Generic[E]):
    error: E


@dataclass(frozen=True)
class Succeeded(Generic[A]):
    value: A


RemoteData = Union[NotAsked, InFlight, Failed[E], Succeeded[A]]

NOT_ASKED = NotAsked()
IN_FLIGHT = InFlight()


def is_not_asked(data: RemoteData[E, A]) -> bool:
    return isinstance(data, NotAsked)


def is_in_flight(data: RemoteData[E, A]) -> bool:
    return isinstance(data, InFlight)


def is_failed(data: RemoteData[E, A]) -> bool:
    return isinstance(data, Failed)


def is_succeeded(data: RemoteData[E, A]) -> bool:
    return isinstance(data, Succeeded)


def map_value(fn: Callable[[A], B], data: RemoteData[E, A]) -> RemoteData[E, B]:
    """Transform the value of a `Succeeded`; every other state passes through."""
    if isinstance(data, Succeeded):
        return Succeeded(fn(data.value))
    return data


def map_error(fn: Callable[[E], F], data: RemoteData[E, A]) -> RemoteData[F, A]:
    """Transform the error of a `Failed`; every other state passes through."""
    if isinstance(data, Failed):
        return Failed(fn(data.error))
    return data


def and_then(fn: Callable[[A], RemoteData[E, B]], data: RemoteData[E, A]) -> RemoteData[E, B]:
    """Chain a computation that itself yields remote data onto a `Succeeded` value."""
    if isinstance(data, Succeeded):
        return fn(data.value)
    return data


def with_default(default: A, data: RemoteData[E, A]) -> A:
    if isinstance(data, Succeeded):
        return data.value
    return default


__all__ = [
    "Failed",
    "IN_FLIGHT",
    "InFlight",
    "NOT_ASKED",
    "NotAsked",
    "RemoteData",
    "Succeeded",
    "and_then",
    "is_failed",
    "is_in_flight",
    "is_not_asked",
    "is_succeeded",
    "map_error",
    "map_value",
    "with_default",
]
