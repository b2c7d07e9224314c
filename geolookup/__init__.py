# -*- coding: utf-8 -*-
"""Pluggable geocoding lookups: forward and reverse queries dispatched to a
provider, fetched with a bounded, optionally proxied HTTP GET."""
from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional

from .cache import ICache, MemoryCache
from .configuration import Configuration
from .dispatcher import Dispatcher, LookupOutcome
from .errors import (
    ConfigurationError,
    ErrorKind,
    GeocoderConnectionError,
    GeocoderError,
    GeocoderTimeout,
    ParseError,
)
from .geocoding_base import BaseLookup, BaseResult
from .provider_registry import get_lookup, iter_providers

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'


def search(query: Any, options: Optional[Mapping[str, Any]] = None, *,
           provider: Optional[str] = None,
           configuration: Optional[Configuration] = None,
           cache: Optional[ICache] = None) -> List[BaseResult]:
    """Geocode ``query`` with the named provider.

    Without ``provider`` the configuration's provider is used, then Nominatim.
    """
    configuration = configuration or Configuration()
    lookup = get_lookup(provider or configuration.provider, configuration=configuration)
    return Dispatcher(lookup, configuration, cache=cache).search(query, options)


def map_link_url(coordinates, *, provider: Optional[str] = None,
                 configuration: Optional[Configuration] = None) -> Optional[str]:
    configuration = configuration or Configuration()
    return get_lookup(provider or configuration.provider, configuration=configuration).map_link_url(coordinates)


__all__ = [
    'BaseLookup',
    'BaseResult',
    'Configuration',
    'ConfigurationError',
    'Dispatcher',
    'ErrorKind',
    'GeocoderConnectionError',
    'GeocoderError',
    'GeocoderTimeout',
    'ICache',
    'LookupOutcome',
    'MemoryCache',
    'ParseError',
    'get_lookup',
    'iter_providers',
    'map_link_url',
    'search',
]
