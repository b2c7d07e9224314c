# -*- coding: utf-8 -*-
"""Nominatim (OpenStreetMap) lookup.
Respect usage policy: one request per second (fixed).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Dict

from .geocoding_base import BaseLookup, BaseResult


@dataclass(frozen=True)
class NominatimResult(BaseResult):
    @property
    def address(self) -> str:
        return self.raw.get('display_name', '')

    @property
    def precision(self) -> Optional[str]:
        # 'type' is the closest thing Nominatim has to a match level
        return self.raw.get('type')

    @property
    def place_rank(self) -> Optional[int]:
        return self.raw.get('place_rank')


class NominatimLookup(BaseLookup):
    provider_id = 'nominatim'
    HOST = 'nominatim.openstreetmap.org'
    min_interval = 1.0

    def build_query_url(self, query, reverse_or_options=False):
        reverse, options = self.extract_reverse_and_options(reverse_or_options)
        params = {'format': 'json', 'addressdetails': 1}
        if reverse:
            lat, lon = self.split_coordinates(query)
            params.update({'lat': lat, 'lon': lon})
            method = 'reverse'
        else:
            params['q'] = query
            method = 'search'
        params.update(options.get('params') or {})
        return f"{self.protocol}://{self.HOST}/{method}?{self.hash_to_query(params)}"

    def records(self, parsed):
        # reverse answers with a single object, or {'error': ...} on no match
        if isinstance(parsed, dict) and 'error' in parsed:
            return []
        return parsed if isinstance(parsed, (list, dict)) else []

    def request_headers(self) -> Dict[str, str]:
        return {'Accept-Language': 'en'}

    def map_link_url(self, coordinates):
        lat, lon = coordinates[0], coordinates[1]
        return f"https://www.openstreetmap.org/?mlat={lat}&mlon={lon}&zoom=15&layers=M"
