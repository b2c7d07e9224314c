from __future__ import annotations

import urllib.parse

import pytest

from geolookup import Configuration
from geolookup.geocoding_base import BaseLookup
from geolookup.google_geocoder import GoogleLookup, GoogleResult
from geolookup.here_geocoder import HereLookup, HereResult
from geolookup.mapbox_geocoder import MapboxLookup, MapboxResult
from geolookup.nominatim_geocoder import NominatimLookup, NominatimResult
from geolookup.opencage_geocoder import OpenCageLookup, OpenCageResult
from geolookup.provider_registry import get_display_name, get_lookup, iter_providers
from geolookup.yahoojp_geocoder import YahooJapanLookup, YahooJapanResult


def _params(url):
    return dict(urllib.parse.parse_qsl(urllib.parse.urlsplit(url).query))


def test_registry_order_and_names():
    ids = [pid for pid, _ in iter_providers()]
    assert ids[0] == "nominatim"
    assert set(ids) == {"nominatim", "google", "mapbox", "opencage", "yahoojp", "here"}
    assert get_display_name("google") == "Google"
    assert get_display_name("unknown") == "unknown"
    assert get_display_name(None) == ""


@pytest.mark.parametrize("pid, result_cls", [
    ("nominatim", NominatimResult),
    ("google", GoogleResult),
    ("mapbox", MapboxResult),
    ("opencage", OpenCageResult),
    ("yahoojp", YahooJapanResult),
    ("here", HereResult),
])
def test_result_type_resolved_from_registry(pid, result_cls):
    assert get_lookup(pid).result_type() is result_cls


def test_api_key_from_configuration():
    conf = Configuration(api_keys={"google": "abc"})
    assert get_lookup("google", configuration=conf).api_key == "abc"
    assert get_lookup("google", configuration=conf, api_key="xyz").api_key == "xyz"


def test_hash_to_query_drops_none_and_sorts():
    q = BaseLookup.hash_to_query({"b": "x y", "a": 1, "c": None})
    assert q == "a=1&b=x+y"


# ---- Nominatim ----

def test_nominatim_forward_url():
    url = NominatimLookup().build_query_url("Tokyo Station", {"reverse": False})
    assert url.startswith("http://nominatim.openstreetmap.org/search?")
    assert _params(url)["q"] == "Tokyo Station"


def test_nominatim_reverse_url_with_tls():
    lookup = NominatimLookup(Configuration(use_tls=True))
    url = lookup.build_query_url("35.68, 139.76", True)
    assert url.startswith("https://nominatim.openstreetmap.org/reverse?")
    params = _params(url)
    assert (params["lat"], params["lon"]) == ("35.68", "139.76")


def test_nominatim_extra_params():
    url = NominatimLookup().build_query_url("Tokyo", {"params": {"limit": 3}})
    assert _params(url)["limit"] == "3"


def test_nominatim_reverse_error_has_no_records():
    assert NominatimLookup().records({"error": "Unable to geocode"}) == []
    assert NominatimLookup().records("junk") == []


def test_nominatim_result():
    r = NominatimResult({"lat": "35.68", "lon": "139.76", "display_name": "Tokyo", "type": "city"})
    assert r.coordinates == (35.68, 139.76)
    assert r.address == "Tokyo"
    assert r.precision == "city"


def test_nominatim_map_link():
    assert "mlat=35.68" in NominatimLookup().map_link_url((35.68, 139.76))


# ---- Google ----

def test_google_urls():
    lookup = GoogleLookup(api_key="k")
    fwd = _params(lookup.build_query_url("Tokyo", False))
    assert fwd == {"address": "Tokyo", "key": "k"}
    rev = _params(lookup.build_query_url("35.68,139.76", {"reverse": True, "language": "ja"}))
    assert rev == {"latlng": "35.68,139.76", "key": "k", "language": "ja"}


def test_google_records_by_status():
    lookup = GoogleLookup()
    assert lookup.records({"status": "OK", "results": [{"a": 1}]}) == [{"a": 1}]
    assert lookup.records({"status": "ZERO_RESULTS", "results": []}) == []
    assert lookup.records({"status": "REQUEST_DENIED"}) == []


def test_google_result():
    r = GoogleResult({
        "geometry": {"location": {"lat": 35.68, "lng": 139.76}},
        "formatted_address": "Tokyo, Japan",
        "types": ["political", "locality"],
        "address_components": [{"long_name": "100-0005", "types": ["postal_code"]}],
    })
    assert r.coordinates == (35.68, 139.76)
    assert r.precision == "locality"
    assert r.postal_code == "100-0005"


def test_google_map_link():
    assert GoogleLookup().map_link_url((1.5, 2.5)) == "https://maps.google.com/maps?q=1.5,2.5"


# ---- Mapbox ----

def test_mapbox_reverse_swaps_to_lon_lat():
    url = MapboxLookup(api_key="t").build_query_url("35.68,139.76", True)
    assert "/mapbox.places/139.76%2C35.68.json?" in url
    assert _params(url)["access_token"] == "t"


def test_mapbox_result():
    r = MapboxResult({
        "geometry": {"coordinates": [139.76, 35.68]},
        "place_name": "Tokyo",
        "place_type": ["place"],
        "context": [{"id": "postcode.1", "text": "100-0005"}],
    })
    assert r.coordinates == (35.68, 139.76)
    assert r.precision == "place"
    assert r.postcode == "100-0005"


def test_map_link_absent_for_providers_without_maps():
    for lookup in (MapboxLookup(), OpenCageLookup(), YahooJapanLookup(), HereLookup()):
        assert lookup.map_link_url((35.68, 139.76)) is None


# ---- OpenCage ----

def test_opencage_url_and_result():
    url = OpenCageLookup(api_key="k").build_query_url("35.68,139.76", True)
    assert _params(url)["q"] == "35.68,139.76"
    r = OpenCageResult({"geometry": {"lat": 35.68, "lng": 139.76}, "formatted": "Tokyo", "confidence": 7})
    assert r.coordinates == (35.68, 139.76)
    assert r.precision == "confidence_7"


# ---- Yahoo! JAPAN ----

def test_yahoojp_urls():
    lookup = YahooJapanLookup(api_key="app")
    assert _params(lookup.build_query_url("東京駅", False))["query"] == "東京駅"
    rev = lookup.build_query_url("35.68,139.76", True)
    assert rev.startswith(YahooJapanLookup.REVERSE_URL)
    assert _params(rev)["lon"] == "139.76"


def test_yahoojp_result():
    r = YahooJapanResult({
        "Name": "東京駅",
        "Geometry": {"Coordinates": "139.76,35.68"},
        "Property": {"Address": "東京都千代田区丸の内1丁目", "AddressMatchingLevel": "3"},
    })
    assert r.coordinates == (35.68, 139.76)
    assert r.address == "東京都千代田区丸の内1丁目"
    assert r.precision == "3"


def test_yahoojp_result_without_geometry():
    assert YahooJapanResult({"Name": "x"}).coordinates is None


# ---- HERE ----

def test_here_urls_and_result():
    lookup = HereLookup(api_key="k")
    assert lookup.build_query_url("Tokyo", False).startswith(HereLookup.GEOCODE_URL)
    rev = lookup.build_query_url("35.68, 139.76", True)
    assert _params(rev)["at"] == "35.68,139.76"
    r = HereResult({"position": {"lat": 35.68, "lng": 139.76}, "title": "Tokyo",
                    "resultType": "locality", "address": {"postalCode": "100"}})
    assert r.coordinates == (35.68, 139.76)
    assert r.postal_code == "100"


@pytest.mark.parametrize("lookup", [
    NominatimLookup(), MapboxLookup(), YahooJapanLookup(), HereLookup(),
])
@pytest.mark.parametrize("query", ["Tokyo", "35.68", "1,2,3", "north,139.76"])
def test_reverse_rejects_non_coordinates(lookup, query):
    with pytest.raises(ValueError, match="lat,lon"):
        lookup.build_query_url(query, True)


def test_split_coordinates_strips_parts():
    assert BaseLookup.split_coordinates(" 35.68 , 139.76 ") == ("35.68", "139.76")
    assert BaseLookup.split_coordinates("1e-05,2") == ("1e-05", "2")


def test_envelope_ignores_unexpected_shapes():
    assert HereLookup().records([1, 2]) == []
    assert HereLookup().records({"items": None}) == []
