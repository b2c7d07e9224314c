# -*- coding: utf-8 -*-
"""Classify a caller's query as forward or reverse and reshape it."""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

# "lat,lon" with optional sign/decimals and optional spaces around each part
COORDS_RE = re.compile(r"""^\s*
    [-+]?\d+(?:\.\d*)?
    \s*,\s*
    [-+]?\d+(?:\.\d*)?
    \s*$
""", re.VERBOSE)


@dataclass(frozen=True)
class NormalizedRequest:
    query: str
    reverse: bool
    options: Mapping[str, Any] = field(default_factory=dict)


def is_coordinates(value: Any) -> bool:
    return isinstance(value, str) and bool(COORDS_RE.match(value))


def normalize(query: Any, options: Optional[Mapping[str, Any]] = None) -> NormalizedRequest:
    if isinstance(query, (list, tuple)):
        if len(query) != 2:
            raise ValueError(f"Coordinate pair must have two elements: {query!r}")
        text = ','.join(str(v) for v in query)
        reverse = True
    else:
        text = str(query)
        reverse = is_coordinates(text)
        if reverse:
            text = ','.join(p.strip() for p in text.split(','))
    merged = {'reverse': reverse}
    if options:
        merged.update(options)
    # explicit option wins, but is still forced to a real bool
    merged['reverse'] = bool(merged['reverse'])
    return NormalizedRequest(query=text, reverse=merged['reverse'], options=merged)


def extract_reverse_and_options(reverse_or_options) -> Tuple[bool, Mapping[str, Any]]:
    """Split a bool-or-mapping argument into ``(reverse, options)``.

    A mapping without a ``reverse`` key is read as forward; callers cannot
    tell "asked for forward" from "said nothing" here.
    """
    if isinstance(reverse_or_options, Mapping):
        return bool(reverse_or_options.get('reverse', False)), reverse_or_options
    return bool(reverse_or_options), {}
