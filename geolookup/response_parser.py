# -*- coding: utf-8 -*-
"""Decode raw provider payloads."""
from __future__ import annotations
import json
from typing import Any

from .errors import ParseError


def parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        preview = (raw or '')[:80]
        raise ParseError(f"Response is not valid JSON: {preview!r}") from e
