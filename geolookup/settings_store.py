# -*- coding: utf-8 -*-
"""Persistent lookup settings backed by QSettings.

``to_configuration()`` snapshots the stored values into an immutable
``Configuration``; lookups never read QSettings directly.
"""
from __future__ import annotations
from typing import Optional

from PyQt5.QtCore import QSettings

from .configuration import Configuration, DEFAULT_TIMEOUT
from .errors import to_kinds
from .provider_registry import DEFAULT_PROVIDER, iter_providers

ORG = 'GeoLookup'
APP = 'geolookup'


class SettingsStore:
    def __init__(self, qs: Optional[QSettings] = None):
        self.qs = qs if qs is not None else QSettings(ORG, APP)

    # 設定キー
    KEY_PROVIDER = 'lookup/provider'
    KEY_USE_TLS = 'lookup/use_tls'
    KEY_TIMEOUT = 'lookup/timeout'
    KEY_HTTP_PROXY = 'lookup/http_proxy'
    KEY_HTTPS_PROXY = 'lookup/https_proxy'
    KEY_ALWAYS_RAISE = 'lookup/always_raise'
    KEY_USER_AGENT = 'lookup/user_agent'
    # プロバイダ別の API キー: 'keys/<provider_id>'
    KEY_API_KEY_PREFIX = 'keys/'

    DEFAULT_USER_AGENT = 'geolookup/0.1 (set your email)'

    def _set_or_remove(self, key: str, val):
        # 空文字ならキーを削除しデフォルトにフォールバックさせる
        if val is None or val == '':
            self.qs.remove(key)
        else:
            self.qs.setValue(key, val)

    def get_provider(self) -> str:
        return self.qs.value(self.KEY_PROVIDER, DEFAULT_PROVIDER, type=str)

    def set_provider(self, val: str):
        self._set_or_remove(self.KEY_PROVIDER, val)

    def get_use_tls(self) -> bool:
        return bool(int(self.qs.value(self.KEY_USE_TLS, 0)))

    def set_use_tls(self, flag: bool):
        self.qs.setValue(self.KEY_USE_TLS, 1 if flag else 0)

    def get_timeout(self) -> float:
        return float(self.qs.value(self.KEY_TIMEOUT, DEFAULT_TIMEOUT))

    def set_timeout(self, seconds: float):
        self.qs.setValue(self.KEY_TIMEOUT, float(seconds))

    def get_proxy(self, protocol: str) -> str:
        key = self.KEY_HTTPS_PROXY if protocol == 'https' else self.KEY_HTTP_PROXY
        return self.qs.value(key, '', type=str)

    def set_proxy(self, protocol: str, val: str):
        key = self.KEY_HTTPS_PROXY if protocol == 'https' else self.KEY_HTTP_PROXY
        self._set_or_remove(key, val)

    def get_always_raise_raw(self) -> str:
        return self.qs.value(self.KEY_ALWAYS_RAISE, '', type=str)

    def set_always_raise_raw(self, val: str):
        self._set_or_remove(self.KEY_ALWAYS_RAISE, val)

    def get_user_agent(self) -> str:
        return self.qs.value(self.KEY_USER_AGENT, self.DEFAULT_USER_AGENT, type=str)

    def set_user_agent(self, val: str):
        self._set_or_remove(self.KEY_USER_AGENT, val)

    def get_api_key(self, provider_id: str) -> str:
        return self.qs.value(self.KEY_API_KEY_PREFIX + provider_id, '', type=str)

    def set_api_key(self, provider_id: str, val: str):
        self._set_or_remove(self.KEY_API_KEY_PREFIX + provider_id, val)

    @staticmethod
    def parse_keywords(raw: str) -> list[str]:
        items = []
        for part in raw.split(','):
            p = part.strip()
            if not p:
                continue
            items.append(p)
        return items

    def to_configuration(self) -> Configuration:
        proxies = {p: self.get_proxy(p) for p in ('http', 'https') if self.get_proxy(p)}
        api_keys = {pid: self.get_api_key(pid) for pid, _ in iter_providers() if self.get_api_key(pid)}
        return Configuration(
            use_tls=self.get_use_tls(),
            proxies=proxies,
            timeout=self.get_timeout(),
            always_raise=to_kinds(self.parse_keywords(self.get_always_raise_raw())),
            user_agent=self.get_user_agent(),
            api_keys=api_keys,
            provider=self.get_provider(),
        )

    def export_all(self) -> dict:
        return {
            'provider': self.get_provider(),
            'use_tls': self.get_use_tls(),
            'timeout': self.get_timeout(),
            'http_proxy': self.get_proxy('http'),
            'https_proxy': self.get_proxy('https'),
            'always_raise': self.get_always_raise_raw(),
            'user_agent': self.get_user_agent(),
        }
