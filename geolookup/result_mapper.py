# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Any, List, Type, TypeVar

R = TypeVar('R')


def map_results(records: Any, result_type: Type[R]) -> List[R]:
    """Wrap each parsed record in ``result_type``, keeping source order.

    The whole list is built before returning so callers never see a
    partially mapped sequence.
    """
    if records is None:
        return []
    if isinstance(records, dict):
        records = [records]
    if not isinstance(records, list):
        raise TypeError(f"Expected a list of records, got {type(records).__name__}")
    for r in records:
        if not isinstance(r, dict):
            raise TypeError(f"Expected a mapping record, got {type(r).__name__}")
    return [result_type(r) for r in records]
