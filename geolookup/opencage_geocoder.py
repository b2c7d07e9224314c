"""OpenCage Geocoding API lookup."""
from __future__ import annotations
from dataclasses import dataclass

from .geocoding_base import BaseLookup, BaseResult, _float


@dataclass(frozen=True)
class OpenCageResult(BaseResult):
    @property
    def latitude(self):
        return _float((self.raw.get('geometry') or {}).get('lat'))

    @property
    def longitude(self):
        return _float((self.raw.get('geometry') or {}).get('lng'))

    @property
    def address(self) -> str:
        return self.raw.get('formatted', '')

    @property
    def precision(self):
        conf = self.raw.get('confidence')
        return f'confidence_{conf}' if conf is not None else None


class OpenCageLookup(BaseLookup):
    provider_id = 'opencage'
    BASE_URL = 'https://api.opencagedata.com/geocode/v1/json'
    min_interval = 0.10

    def build_query_url(self, query, reverse_or_options=False):
        _, options = self.extract_reverse_and_options(reverse_or_options)
        # the same endpoint takes "lat,lng" for reverse lookups
        params = {'q': query, 'key': self.api_key or None, 'no_annotations': 1}
        params.update(options.get('params') or {})
        return f"{self.BASE_URL}?{self.hash_to_query(params)}"

    def records(self, parsed):
        return self.envelope(parsed, 'results')
