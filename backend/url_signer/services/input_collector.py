from __future__ import annotations

from ..agents.base import PagedList


async def collect_urls(*, list_mode: bool, single_url: str | None, url_list: PagedList | None) -> list[str]:
    """リスト/単一モードに応じてURLを取り出し、trimして空要素を落とす。"""
    if list_mode:
        if url_list is None:
            return []
        n = await url_list.length()
        raw = await url_list.get(0, n)
        return [u.strip() for u in raw if u and u.strip()]

    u = (single_url or "").strip()
    return [u] if u else []
