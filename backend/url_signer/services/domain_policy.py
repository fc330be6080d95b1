from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import urlsplit

from ..errors import DomainViolation


@dataclass(frozen=True)
class WhitelistConfig:
    custom_domains: frozenset[str]
    always_trusted: frozenset[str]

    @property
    def trusted(self) -> frozenset[str]:
        return self.always_trusted | self.custom_domains

    def is_trusted(self, host: str | None) -> bool:
        return _domain_allowed(host, self.trusted)

    def requires_auth(self, host: str | None) -> bool:
        # CDNドメインは公開されているため認証ヘッダを送らない（他アプリへの漏洩防止）
        return _domain_allowed(host, self.custom_domains)


def _clean_domain(entry: str) -> str:
    d = (entry or "").strip().lower()
    d = re.sub(r"^[a-z][a-z0-9+.-]*://", "", d)
    d = d.split("/", 1)[0]
    return d.split(":")[0].strip()


def parse_whitelist(raw: str | None, *, default_domain: str = "cdn.bubble.io") -> WhitelistConfig:
    """カンマ区切りのallowlist文字列からWhitelistConfigを作る。"""
    custom = {_clean_domain(d) for d in (raw or "").split(",")}
    custom.discard("")
    always = {_clean_domain(default_domain)} - {""}
    return WhitelistConfig(custom_domains=frozenset(custom), always_trusted=frozenset(always))


def _domain_allowed(host: str | None, domains: Iterable[str]) -> bool:
    if not host:
        return False
    return any(host == d or host.endswith("." + d) for d in domains)


def with_default_scheme(url: str) -> str:
    """スキームが無いURLにhttpsを補う。https:// と http:// はそのまま返す。"""
    head = url[:8].lower()
    if head.startswith("https") or head.startswith("http://"):
        return url
    if url.startswith("//"):
        return "https:" + url
    return "https://" + url


def extract_host(url: str) -> str | None:
    """スキームを補完してホスト名（小文字）を取り出す。解析できなければNone。"""
    try:
        host = urlsplit(with_default_scheme(url)).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def validate_domains(urls: list[str], config: WhitelistConfig) -> None:
    """allowlist外のURLが1件でもあればバッチ全体をDomainViolationで拒否する。"""
    offenders: list[str] = []
    for index, url in enumerate(urls):
        host = extract_host(url)
        if not config.is_trusted(host):
            offenders.append(f'URL[{index}] "{url}" (domain: {host or "invalid"})')
    if offenders:
        allowed = ", ".join(sorted(config.trusted))
        raise DomainViolation(
            f"Domain validation failed for {len(offenders)} URL(s): "
            f"{'; '.join(offenders)}. Allowed domains: {allowed}"
        )
