# -*- coding: utf-8 -*-
"""Error kinds and exceptions raised by the lookup pipeline."""
from __future__ import annotations
import builtins
import enum
from typing import Iterable, FrozenSet


class ErrorKind(enum.Enum):
    CONFIGURATION = 'configuration'
    CONNECTION = 'connection'
    TIMEOUT = 'timeout'
    PARSE = 'parse'


class GeocoderError(Exception):
    """Base class. ``kind`` tags the failure for the error policy."""
    kind: ErrorKind = ErrorKind.CONNECTION


class ConfigurationError(GeocoderError):
    kind = ErrorKind.CONFIGURATION


class GeocoderConnectionError(GeocoderError, builtins.ConnectionError):
    kind = ErrorKind.CONNECTION


class GeocoderTimeout(GeocoderError, builtins.TimeoutError):
    kind = ErrorKind.TIMEOUT


class ParseError(GeocoderError, ValueError):
    kind = ErrorKind.PARSE


_CLASS_TO_KIND = {
    ConfigurationError: ErrorKind.CONFIGURATION,
    GeocoderConnectionError: ErrorKind.CONNECTION,
    GeocoderTimeout: ErrorKind.TIMEOUT,
    ParseError: ErrorKind.PARSE,
    builtins.ConnectionError: ErrorKind.CONNECTION,
    builtins.TimeoutError: ErrorKind.TIMEOUT,
}


def to_kind(value) -> ErrorKind:
    """Accept an ErrorKind, an exception class or a kind name."""
    if isinstance(value, ErrorKind):
        return value
    if isinstance(value, type) and value in _CLASS_TO_KIND:
        return _CLASS_TO_KIND[value]
    if isinstance(value, str):
        name = value.strip().lower()
        for kind in ErrorKind:
            if kind.value == name:
                return kind
    raise ConfigurationError(f"Unknown error kind: {value!r}")


def to_kinds(values: Iterable) -> FrozenSet[ErrorKind]:
    return frozenset(to_kind(v) for v in values or ())
