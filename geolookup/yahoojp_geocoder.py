"""Yahoo! JAPAN 地図 Geocoder API lookup (forward and reverse)."""
from __future__ import annotations
from dataclasses import dataclass

from .geocoding_base import BaseLookup, BaseResult, _float


@dataclass(frozen=True)
class YahooJapanResult(BaseResult):
    @property
    def _lon_lat(self):
        coord_str = (self.raw.get('Geometry') or {}).get('Coordinates', '')
        parts = coord_str.split(',')[:2]  # lon,lat order
        return parts if len(parts) == 2 else [None, None]

    @property
    def latitude(self):
        return _float(self._lon_lat[1])

    @property
    def longitude(self):
        return _float(self._lon_lat[0])

    @property
    def address(self) -> str:
        return (self.raw.get('Property') or {}).get('Address') or self.raw.get('Name', '')

    @property
    def precision(self):
        return (self.raw.get('Property') or {}).get('AddressMatchingLevel')


class YahooJapanLookup(BaseLookup):
    provider_id = 'yahoojp'
    BASE_URL = 'https://map.yahooapis.jp/geocode/V1/geoCoder'
    REVERSE_URL = 'https://map.yahooapis.jp/geoapi/V1/reverseGeoCoder'
    min_interval = 0.10

    def build_query_url(self, query, reverse_or_options=False):
        reverse, options = self.extract_reverse_and_options(reverse_or_options)
        params = {'appid': self.api_key or None, 'output': 'json'}
        if reverse:
            lat, lon = self.split_coordinates(query)
            params.update({'lat': lat, 'lon': lon})
            base = self.REVERSE_URL
        else:
            params['query'] = query
            base = self.BASE_URL
        params.update(options.get('params') or {})
        return f"{base}?{self.hash_to_query(params)}"

    def records(self, parsed):
        return self.envelope(parsed, 'Feature')
