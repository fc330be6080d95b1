from __future__ import annotations

import logging
from typing import Callable

import httpx

from ..agents.base import Failed, Prober, Resolved
from ..agents.fetchers import ProbeError
from ..errors import InsecureSchemeRejected, InvalidUrlFormat, ProbeFailed, UrlResolutionError
from .domain_policy import with_default_scheme


logger = logging.getLogger(__name__)


def normalize_url(url: str, *, index: int | None = None) -> str:
    """
    プローブ前にURLをhttpsへ正規化する。
    - https で始まる場合はそのまま
    - http:// は通信せずに拒否
    - //host/path（プロトコル相対）は https: を付与
    - それ以外は https:// を付与
    """
    if url[:7].lower() == "http://":
        raise InsecureSchemeRejected(f"HTTPS is required, refusing insecure URL: {url}", url=url, index=index)
    normalized = with_default_scheme(url)

    try:
        parsed = httpx.URL(normalized)
    except (httpx.InvalidURL, ValueError, TypeError):
        parsed = None
    if parsed is None or parsed.scheme != "https" or not parsed.host:
        raise InvalidUrlFormat(f"Invalid URL format: {url}", url=url, index=index)
    return normalized


async def resolve_url(
    url: str,
    *,
    index: int,
    prober: Prober,
    api_key: str | None,
    requires_auth: Callable[[str | None], bool],
) -> str:
    """1件のURLについてHEADプローブを行い、Locationまたは正規化済みURLを返す。"""
    signed_url = normalize_url(url, index=index)
    host = httpx.URL(signed_url).host

    headers: dict[str, str] = {}
    if api_key and requires_auth(host):
        headers["Authorization"] = f"Bearer {api_key}"

    try:
        result = await prober.probe(signed_url, headers)
    except ProbeError as first:
        # 認証なしで1回だけ再試行する
        logger.warning("probe failed for URL[%d] (auth=%s): %s; retrying without auth", index, bool(headers), first)
        try:
            result = await prober.probe(signed_url, {})
        except ProbeError as second:
            raise ProbeFailed(str(second), url=url, index=index) from second

    return result.location or signed_url


async def resolve_outcome(
    url: str,
    *,
    index: int,
    prober: Prober,
    api_key: str | None,
    requires_auth: Callable[[str | None], bool],
) -> Resolved | Failed:
    try:
        final_url = await resolve_url(url, index=index, prober=prober, api_key=api_key, requires_auth=requires_auth)
    except UrlResolutionError as e:
        logger.warning("URL[%d] could not be resolved: %s", index, e)
        return Failed(index=index, url=url, error_message=str(e))
    except Exception as e:
        logger.exception("unexpected error while resolving URL[%d]", index)
        return Failed(index=index, url=url, error_message=str(e) or type(e).__name__)
    return Resolved(index=index, final_url=final_url)
