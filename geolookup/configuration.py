# -*- coding: utf-8 -*-
"""Immutable lookup configuration.

A ``Configuration`` is built once (directly or via ``SettingsStore``) and
passed by reference to the transport, the error policy and the dispatcher.
It is never mutated during a lookup, so one instance can be shared by
concurrent searches.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Mapping, FrozenSet

from .errors import ErrorKind, to_kinds

DEFAULT_TIMEOUT = 3.0


@dataclass(frozen=True)
class Configuration:
    use_tls: bool = False
    # protocol ('http' / 'https') -> 'host:port' or 'user:password@host:port'
    proxies: Mapping[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    always_raise: FrozenSet[ErrorKind] = frozenset()
    user_agent: Optional[str] = None
    api_keys: Mapping[str, str] = field(default_factory=dict)
    # registry id used when a caller names no provider
    provider: Optional[str] = None

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, 'always_raise', to_kinds(self.always_raise))
        object.__setattr__(self, 'proxies', dict(self.proxies or {}))
        object.__setattr__(self, 'api_keys', dict(self.api_keys or {}))
        object.__setattr__(self, 'timeout', float(self.timeout))

    @property
    def protocol(self) -> str:
        return 'https' if self.use_tls else 'http'

    def proxy_for(self, protocol: str) -> Optional[str]:
        return self.proxies.get(protocol) or None

    def api_key(self, provider_id: str) -> str:
        return self.api_keys.get(provider_id, '')
