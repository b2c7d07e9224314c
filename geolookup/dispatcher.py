# -*- coding: utf-8 -*-
"""Lookup dispatcher.

normalize -> build URL -> fetch (via cache) -> parse -> map, strictly in
that order. Transport and parse failures are captured in a
``LookupOutcome`` and the error policy decides at the ``search`` boundary
whether they raise or degrade to an empty result list.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from . import error_policy
from .cache import ICache
from .configuration import Configuration
from .errors import GeocoderError, ParseError
from .geocoding_base import BaseLookup, BaseResult
from .query_normalizer import normalize
from .result_mapper import map_results
from .transport import TransportClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupOutcome:
    results: List[BaseResult] = field(default_factory=list)
    error: Optional[GeocoderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Dispatcher:
    def __init__(self, lookup: BaseLookup, configuration: Optional[Configuration] = None,
                 cache: Optional[ICache] = None, transport: Optional[TransportClient] = None):
        self.lookup_provider = lookup
        self.configuration = configuration or lookup.configuration
        self.transport = transport or TransportClient(
            self.configuration, cache=cache, min_interval=lookup.min_interval)

    def lookup(self, query: Any, options: Optional[Mapping[str, Any]] = None) -> LookupOutcome:
        provider = self.lookup_provider
        request = normalize(query, options)
        url = provider.build_query_url(request.query, request.options)
        try:
            raw = self.transport.fetch(url, provider.request_headers())
            parsed = provider.parse_response(raw)
            results = self._map(parsed)
        except GeocoderError as e:
            return LookupOutcome(error=e)
        logger.debug("%s: %d result(s) for %r", provider.provider_id, len(results), request.query)
        return LookupOutcome(results=results)

    def _map(self, parsed: Any) -> List[BaseResult]:
        provider = self.lookup_provider
        try:
            return map_results(provider.records(parsed), provider.result_type())
        except (AttributeError, TypeError, ValueError) as e:
            # valid JSON, but not records this provider can wrap
            raise ParseError(f"Unexpected {provider.provider_id} response shape: {e}") from e

    def search(self, query: Any, options: Optional[Mapping[str, Any]] = None) -> List[BaseResult]:
        """Query the geocoding service and return a list of Results.

        Takes a search string (eg: "1600 Pennsylvania Ave, Washington, DC")
        for forward geocoding, or coordinates ("38.89,-77.03" or a
        (latitude, longitude) pair) for reverse geocoding. Returns an empty
        list on timeout or error unless the error kind is in
        ``Configuration.always_raise``.
        """
        outcome = self.lookup(query, options)
        if not outcome.ok:
            error_policy.apply(outcome.error, self.configuration)
            return []
        return outcome.results

    def map_link_url(self, coordinates: Sequence[float]) -> Optional[str]:
        return self.lookup_provider.map_link_url(coordinates)
