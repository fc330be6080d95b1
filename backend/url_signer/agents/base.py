from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Protocol


class Prober(Protocol):
    """HEADプローブの抽象。実運用ではhttpx、検証ではモックトランスポートを注入する。"""

    async def probe(self, url: str, headers: Mapping[str, str]) -> "ProbeResult":
        ...


class PagedList(Protocol):
    """ホストが提供するページング付きリスト（file_urls）の抽象。"""

    async def length(self) -> int:
        ...

    async def get(self, offset: int, count: int) -> List[str]:
        ...


@dataclass
class ProbeResult:
    status_code: int
    location: str | None = None


@dataclass
class Resolved:
    index: int
    final_url: str


@dataclass
class Failed:
    index: int
    url: str
    error_message: str


@dataclass
class BatchSuccess:
    signed_urls: List[str]

    def to_payload(self) -> dict:
        return {"signed_urls": list(self.signed_urls)}


@dataclass
class BatchError:
    message: str

    def to_payload(self) -> dict:
        return {"returned_error": True, "error_message": self.message}


class StaticPagedList:
    """通常のリストをPagedListとして扱うアダプタ。"""

    def __init__(self, items: List[str] | None):
        self.items = list(items or [])

    async def length(self) -> int:
        return len(self.items)

    async def get(self, offset: int, count: int) -> List[str]:
        return self.items[offset : offset + count]
