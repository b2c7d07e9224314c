# -*- coding: utf-8 -*-
"""Geocoding base interfaces.

``BaseLookup`` is the contract each provider implements: how to build the
query URL and which Result class wraps its records. Parsing and map links
have defaults. ``BaseResult`` is the immutable record wrapper shared by all
provider results.
"""
from __future__ import annotations
import abc
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Type, Union

from .configuration import Configuration
from .query_normalizer import extract_reverse_and_options
from .response_parser import parse_json

ReverseOrOptions = Union[bool, Mapping[str, Any]]


@dataclass(frozen=True)
class BaseResult:
    raw: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'raw', dict(self.raw or {}))

    @property
    def latitude(self) -> Optional[float]:
        return _float(self.raw.get('lat'))

    @property
    def longitude(self) -> Optional[float]:
        return _float(self.raw.get('lon'))

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        lat, lon = self.latitude, self.longitude
        if lat is None or lon is None:
            return None
        return lat, lon

    @property
    def address(self) -> str:
        return ''

    @property
    def precision(self) -> Optional[str]:
        return None


def _float(value) -> Optional[float]:
    if value is None or value == '':
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class BaseLookup(abc.ABC):
    #: registry id, e.g. 'nominatim'
    provider_id: str = ''
    #: seconds between network requests (usage policy courtesy)
    min_interval: float = 0.0

    def __init__(self, configuration: Optional[Configuration] = None, api_key: Optional[str] = None):
        self.configuration = configuration or Configuration()
        self.api_key = api_key if api_key is not None else self.configuration.api_key(self.provider_id)

    @abc.abstractmethod
    def build_query_url(self, query: str, reverse_or_options: ReverseOrOptions = False) -> str:
        """URL to use for querying the geocoding service."""

    def result_type(self) -> Type[BaseResult]:
        from .provider_registry import result_type_for
        return result_type_for(self.provider_id)

    def parse_response(self, raw: str) -> Any:
        return parse_json(raw)

    def records(self, parsed: Any) -> Any:
        """Select the list of result records inside a decoded payload."""
        return parsed

    def map_link_url(self, coordinates: Sequence[float]) -> Optional[str]:
        """URL for a map of the given coordinates, when the service has one."""
        return None

    def request_headers(self) -> Dict[str, str]:
        return {}

    @property
    def protocol(self) -> str:
        return self.configuration.protocol

    # ---- helpers ----
    @staticmethod
    def extract_reverse_and_options(reverse_or_options: ReverseOrOptions):
        return extract_reverse_and_options(reverse_or_options)

    @staticmethod
    def envelope(parsed: Any, key: str) -> list:
        if not isinstance(parsed, dict):
            return []
        return parsed.get(key) or []

    @staticmethod
    def split_coordinates(query: str) -> Tuple[str, str]:
        """Split a reverse query into ``(lat, lon)`` strings."""
        parts = [p.strip() for p in str(query).split(',')]
        if len(parts) != 2 or any(_float(p) is None for p in parts):
            raise ValueError(f"Reverse lookup needs \"lat,lon\" coordinates, got {query!r}")
        return parts[0], parts[1]

    @staticmethod
    def hash_to_query(params: Mapping[str, Any]) -> str:
        """URL-encode ``params``, skipping None values, pairs sorted."""
        pairs = [
            f"{urllib.parse.quote_plus(str(k))}={urllib.parse.quote_plus(str(v))}"
            for k, v in params.items() if v is not None
        ]
        return '&'.join(sorted(pairs))
