"""Central provider registry: internal IDs, display names, lookup and Result classes.
Add a provider here to make it reachable from ``search`` and the settings store."""
from __future__ import annotations
from typing import Dict, Iterator, Optional, Tuple, Type

from .configuration import Configuration
from .errors import ConfigurationError
from .geocoding_base import BaseLookup, BaseResult
from .google_geocoder import GoogleLookup, GoogleResult
from .here_geocoder import HereLookup, HereResult
from .mapbox_geocoder import MapboxLookup, MapboxResult
from .nominatim_geocoder import NominatimLookup, NominatimResult
from .opencage_geocoder import OpenCageLookup, OpenCageResult
from .yahoojp_geocoder import YahooJapanLookup, YahooJapanResult

# Ordered list of (internal_id, display_name, lookup class, result class)
PROVIDERS = [
    ("nominatim", "Nominatim", NominatimLookup, NominatimResult),
    ("google", "Google", GoogleLookup, GoogleResult),
    ("mapbox", "Mapbox", MapboxLookup, MapboxResult),
    ("opencage", "OpenCage", OpenCageLookup, OpenCageResult),
    ("yahoojp", "Yahoo!ジオコーダAPI", YahooJapanLookup, YahooJapanResult),
    ("here", "HERE", HereLookup, HereResult),
]

DEFAULT_PROVIDER = "nominatim"

# Fast lookup dicts
_ID_TO_DISPLAY: Dict[str, str] = {pid: disp for pid, disp, _, _ in PROVIDERS}
_ID_TO_LOOKUP: Dict[str, Type[BaseLookup]] = {pid: lk for pid, _, lk, _ in PROVIDERS}
_ID_TO_RESULT: Dict[str, Type[BaseResult]] = {pid: res for pid, _, _, res in PROVIDERS}


def get_display_name(provider_id: str | None) -> str:
    if not provider_id:
        return ""
    return _ID_TO_DISPLAY.get(provider_id, provider_id or "")


def iter_providers() -> Iterator[Tuple[str, str]]:
    """Yield (internal_id, display_name) preserving order."""
    for pid, disp, _, _ in PROVIDERS:
        yield pid, disp


def result_type_for(provider_id: str) -> Type[BaseResult]:
    try:
        return _ID_TO_RESULT[provider_id]
    except KeyError:
        raise ConfigurationError(f"Unknown geocoding provider: {provider_id!r}") from None


def get_lookup(provider_id: Optional[str] = None,
               configuration: Optional[Configuration] = None,
               api_key: Optional[str] = None) -> BaseLookup:
    pid = provider_id or DEFAULT_PROVIDER
    try:
        cls = _ID_TO_LOOKUP[pid]
    except KeyError:
        raise ConfigurationError(f"Unknown geocoding provider: {pid!r}") from None
    return cls(configuration=configuration, api_key=api_key)
