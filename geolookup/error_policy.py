# -*- coding: utf-8 -*-
"""Raise-or-warn decision for lookup failures."""
from __future__ import annotations
import logging

from .configuration import Configuration
from .errors import ErrorKind, GeocoderError

logger = logging.getLogger(__name__)

WARNINGS = {
    ErrorKind.CONNECTION: "Geocoding API connection cannot be established.",
    ErrorKind.TIMEOUT: "Geocoding API not responding fast enough "
                       "(see Configuration.timeout to set limit).",
    ErrorKind.PARSE: "Geocoding API's response was not valid JSON.",
}


def should_raise(kind: ErrorKind, configuration: Configuration) -> bool:
    if kind is ErrorKind.CONFIGURATION:
        return True
    if kind is ErrorKind.PARSE:
        return False
    return kind in configuration.always_raise


def apply(error: GeocoderError, configuration: Configuration) -> None:
    """Re-raise ``error`` or log it as a warning."""
    if should_raise(error.kind, configuration):
        raise error
    logger.warning("%s (%s)", WARNINGS.get(error.kind, str(error)), error)
