# -*- coding: utf-8 -*-
"""HTTP transport for lookups.

Builds a urllib opener (direct or through the configured proxy, TLS when
``use_tls`` is set), runs the GET under one deadline of the configured
timeout and returns the decoded body. A cache, when given, is consulted
before the network and filled after a successful fetch. Check-then-set is
not atomic: two identical concurrent lookups may both reach the network.
"""
from __future__ import annotations
import http.client
import logging
import socket
import ssl
import threading
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Dict, Optional

import chardet

from .cache import ICache
from .configuration import Configuration
from .errors import ConfigurationError, GeocoderConnectionError, GeocoderError, GeocoderTimeout

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = 'geolookup/0.1'
DEFAULT_PORTS = {'http': 80, 'https': 443}


def parse_proxy(protocol: str, proxy: str) -> urllib.parse.SplitResult:
    """Parse ``host:port`` / ``user:pass@host:port`` into a proxy URL.

    Raises ConfigurationError for anything that is not a usable URL.
    """
    proxy_url = proxy if '://' in proxy else f'{protocol}://{proxy}'
    error = ConfigurationError(f"Error parsing {protocol.upper()} proxy URL: '{proxy_url}'")
    if any(ch.isspace() for ch in proxy_url):
        raise error
    try:
        uri = urllib.parse.urlsplit(proxy_url)
        port = uri.port
    except ValueError as e:
        raise error from e
    if not uri.hostname or uri.scheme not in DEFAULT_PORTS:
        raise error
    if port is None:
        uri = uri._replace(netloc=f'{uri.netloc}:{DEFAULT_PORTS[uri.scheme]}')
    return uri


def _decode(raw: bytes, charset: Optional[str]) -> str:
    if charset:
        try:
            return raw.decode(charset, 'replace')
        except LookupError:
            logger.debug("Unknown charset %r, detecting", charset)
    res = chardet.detect(raw) if raw else {}
    enc = res.get('encoding') or ''
    conf = res.get('confidence') or 0
    if enc and conf >= 0.5:
        return raw.decode(enc, 'replace')
    return raw.decode('utf-8', 'replace')


class TransportClient:
    #: bytes requested per read while draining a response body
    CHUNK_SIZE = 8192

    def __init__(self, configuration: Configuration, cache: Optional[ICache] = None,
                 min_interval: float = 0.0):
        self.configuration = configuration
        self.cache = cache
        self.min_interval = min_interval
        self._last_request_ts = 0.0
        self._throttle_lock = threading.Lock()

    def _throttle(self):
        if self.min_interval <= 0:
            return
        # held while sleeping so concurrent fetches queue up behind each other
        with self._throttle_lock:
            now = time.monotonic()
            wait = self._last_request_ts + self.min_interval - now
            if wait > 0:
                time.sleep(wait)
            self._last_request_ts = time.monotonic()

    def build_opener(self) -> urllib.request.OpenerDirector:
        conf = self.configuration
        protocol = conf.protocol
        proxies: Dict[str, str] = {}
        proxy = conf.proxy_for(protocol)
        if proxy:
            proxies[protocol] = parse_proxy(protocol, proxy).geturl()
        # an empty ProxyHandler disables proxies picked up from the environment
        handlers = [urllib.request.ProxyHandler(proxies)]
        if conf.use_tls:
            handlers.append(urllib.request.HTTPSHandler(context=ssl.create_default_context()))
        return urllib.request.build_opener(*handlers)

    def _request_url(self, url: str) -> str:
        if self.configuration.use_tls and url.startswith('http://'):
            return 'https://' + url[len('http://'):]
        return url

    def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """Return the raw body for ``url``, from the cache when possible."""
        # proxy problems surface before the cache or the network are touched
        opener = self.build_opener()
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug("Cache hit for %s", url)
                return cached
        body, ok = self._get(opener, url, headers or {})
        if self.cache is not None and ok:
            self.cache.set(url, body)
        return body

    def _read_body(self, resp, deadline: float, url: str) -> bytes:
        """Drain ``resp`` chunk by chunk, giving up once ``deadline`` passes."""
        read = getattr(resp, 'read1', None) or resp.read
        chunks = []
        while True:
            if time.monotonic() > deadline:
                raise GeocoderTimeout(f"Timed out after {self.configuration.timeout}s: {url}")
            chunk = read(self.CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        if time.monotonic() > deadline:
            raise GeocoderTimeout(f"Timed out after {self.configuration.timeout}s: {url}")
        return b''.join(chunks)

    def _get(self, opener: urllib.request.OpenerDirector, url: str, headers: Dict[str, str]):
        conf = self.configuration
        req_headers = {'User-Agent': conf.user_agent or DEFAULT_USER_AGENT}
        req_headers.update(headers)
        req = urllib.request.Request(self._request_url(url), headers=req_headers)
        self._throttle()
        logger.debug("GET %s", req.full_url)
        # one deadline for connect, headers and body together; the socket
        # timeout still bounds each individual blocking operation
        deadline = time.monotonic() + conf.timeout
        try:
            with opener.open(req, timeout=conf.timeout) as resp:
                raw = self._read_body(resp, deadline, url)
                charset = resp.headers.get_content_charset()
            return _decode(raw, charset), True
        except GeocoderError:
            raise
        except urllib.error.HTTPError as e:
            # error bodies are still handed to the parser, but never cached
            try:
                raw = self._read_body(e, deadline, url)
                charset = e.headers.get_content_charset() if e.headers else None
            finally:
                e.close()
            logger.debug("HTTP %s from %s", e.code, url)
            return _decode(raw, charset), False
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise GeocoderTimeout(f"Timed out after {conf.timeout}s: {url}") from e
            raise GeocoderConnectionError(f"Cannot connect to {url}: {e.reason}") from e
        except (socket.timeout, TimeoutError) as e:
            raise GeocoderTimeout(f"Timed out after {conf.timeout}s: {url}") from e
        except http.client.HTTPException as e:
            # truncated bodies, malformed status lines, oversized headers
            raise GeocoderConnectionError(f"Broken response from {url}: {e!r}") from e
        except OSError as e:
            raise GeocoderConnectionError(f"Cannot connect to {url}: {e}") from e
