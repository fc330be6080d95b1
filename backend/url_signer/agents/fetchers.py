from __future__ import annotations

from typing import Mapping

import httpx

from .base import ProbeResult


class ProbeError(Exception):
    pass


def _accepted(status_code: int) -> bool:
    return status_code == 302 or 200 <= status_code < 300


class HttpxProber:
    """リダイレクトを追わずにHEADを投げ、302/2xxのみ成功とみなすプローバ。"""

    def __init__(self, timeout: float = 10.0, *, transport: httpx.AsyncBaseTransport | None = None):
        self.client = httpx.AsyncClient(timeout=timeout, follow_redirects=False, transport=transport)

    async def probe(self, url: str, headers: Mapping[str, str]) -> ProbeResult:
        try:
            resp = await self.client.head(url, headers=dict(headers))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ProbeError(str(e) or type(e).__name__) from e
        except (UnicodeEncodeError, ValueError) as e:
            # ASCII以外を含むヘッダ値はリクエスト生成時点で失敗する
            raise ProbeError(f"Invalid request headers: {type(e).__name__}") from e
        if not _accepted(resp.status_code):
            raise ProbeError(f"Request failed with status code {resp.status_code}")
        return ProbeResult(status_code=resp.status_code, location=resp.headers.get("location"))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HttpxProber":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
