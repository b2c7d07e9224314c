"""HERE Geocoding & Search API (geocode / revgeocode endpoints)."""
from __future__ import annotations
from dataclasses import dataclass

from .geocoding_base import BaseLookup, BaseResult, _float


@dataclass(frozen=True)
class HereResult(BaseResult):
    @property
    def latitude(self):
        return _float((self.raw.get('position') or {}).get('lat'))

    @property
    def longitude(self):
        return _float((self.raw.get('position') or {}).get('lng'))

    @property
    def address(self) -> str:
        return self.raw.get('title', '')

    @property
    def precision(self):
        return self.raw.get('resultType')

    @property
    def postal_code(self) -> str:
        return (self.raw.get('address') or {}).get('postalCode', '')


class HereLookup(BaseLookup):
    provider_id = 'here'
    GEOCODE_URL = 'https://geocode.search.hereapi.com/v1/geocode'
    REVGEOCODE_URL = 'https://revgeocode.search.hereapi.com/v1/revgeocode'
    min_interval = 0.05

    def build_query_url(self, query, reverse_or_options=False):
        reverse, options = self.extract_reverse_and_options(reverse_or_options)
        params = {'apiKey': self.api_key or None}
        if reverse:
            params['at'] = ','.join(self.split_coordinates(query))
            base = self.REVGEOCODE_URL
        else:
            params['q'] = query
            base = self.GEOCODE_URL
        params.update(options.get('params') or {})
        return f"{base}?{self.hash_to_query(params)}"

    def records(self, parsed):
        return self.envelope(parsed, 'items')
