# -*- coding: utf-8 -*-
"""Google Geocoding API lookup.
Precision derives from result types (first matched in PRIORITY order).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, List

from .geocoding_base import BaseLookup, BaseResult, _float

logger = logging.getLogger(__name__)

PRIORITY = [
    'street_address', 'premise', 'subpremise', 'route', 'intersection',
    'plus_code', 'neighborhood', 'sublocality', 'sublocality_level_1',
    'locality', 'administrative_area_level_3', 'administrative_area_level_2',
    'administrative_area_level_1', 'country'
]

STATUS_MESSAGES = {
    'ZERO_RESULTS': 'Zero results',
    'OVER_QUERY_LIMIT': 'Over query limit',
    'REQUEST_DENIED': 'Request denied',
    'INVALID_REQUEST': 'Invalid request',
}


def precision_from_types(types: List[str]) -> Optional[str]:
    for p in PRIORITY:
        if p in types:
            return p
    return types[0] if types else None


@dataclass(frozen=True)
class GoogleResult(BaseResult):
    @property
    def _location(self) -> dict:
        return (self.raw.get('geometry') or {}).get('location') or {}

    @property
    def latitude(self):
        return _float(self._location.get('lat'))

    @property
    def longitude(self):
        return _float(self._location.get('lng'))

    @property
    def address(self) -> str:
        return self.raw.get('formatted_address', '')

    @property
    def precision(self):
        return precision_from_types(self.raw.get('types') or [])

    @property
    def place_id(self) -> str:
        return self.raw.get('place_id', '')

    @property
    def postal_code(self) -> str:
        for comp in self.raw.get('address_components') or []:
            if 'postal_code' in (comp.get('types') or []):
                return comp.get('long_name') or ''
        return ''


class GoogleLookup(BaseLookup):
    provider_id = 'google'
    HOST = 'maps.googleapis.com'
    # small courtesy pause (not official rate control)
    min_interval = 0.05

    def build_query_url(self, query, reverse_or_options=False):
        reverse, options = self.extract_reverse_and_options(reverse_or_options)
        params = {
            ('latlng' if reverse else 'address'): query,
            'key': self.api_key or None,
            'language': options.get('language'),
        }
        params.update(options.get('params') or {})
        return f"{self.protocol}://{self.HOST}/maps/api/geocode/json?{self.hash_to_query(params)}"

    def records(self, parsed):
        status = parsed.get('status') if isinstance(parsed, dict) else None
        if status != 'OK':
            if status != 'ZERO_RESULTS':
                logger.warning("Google Geocoding API error: %s", STATUS_MESSAGES.get(status, status))
            return []
        return self.envelope(parsed, 'results')

    def map_link_url(self, coordinates):
        return "https://maps.google.com/maps?q=" + ','.join(str(c) for c in coordinates)
