"""Mapbox Geocoding API lookup.
Requires access token. Reverse queries are sent as lon,lat.
"""
from __future__ import annotations
import urllib.parse
from dataclasses import dataclass

from .geocoding_base import BaseLookup, BaseResult, _float


@dataclass(frozen=True)
class MapboxResult(BaseResult):
    @property
    def _coords(self) -> list:
        return (self.raw.get('geometry') or {}).get('coordinates') or []

    @property
    def latitude(self):
        c = self._coords
        return _float(c[1]) if len(c) > 1 else None

    @property
    def longitude(self):
        c = self._coords
        return _float(c[0]) if c else None

    @property
    def address(self) -> str:
        return self.raw.get('place_name', '')

    @property
    def precision(self):
        pt = self.raw.get('place_type') or []
        return pt[0] if isinstance(pt, list) and pt else None

    @property
    def postcode(self) -> str:
        for c in self.raw.get('context') or []:
            if str(c.get('id', '')).startswith('postcode.'):
                return c.get('text') or ''
        return ''


class MapboxLookup(BaseLookup):
    provider_id = 'mapbox'
    BASE_URL = 'https://api.mapbox.com/geocoding/v5/mapbox.places'
    min_interval = 0.05

    def build_query_url(self, query, reverse_or_options=False):
        reverse, options = self.extract_reverse_and_options(reverse_or_options)
        if reverse:
            lat, lon = self.split_coordinates(query)
            query = f"{lon},{lat}"
        params = {'access_token': self.api_key or None}
        params.update(options.get('params') or {})
        return f"{self.BASE_URL}/{urllib.parse.quote(query)}.json?{self.hash_to_query(params)}"

    def records(self, parsed):
        return self.envelope(parsed, 'features')
