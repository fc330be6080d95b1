from __future__ import annotations

import asyncio
import logging

from ..agents.base import BatchError, BatchSuccess, Failed, PagedList, Prober
from ..errors import BoundViolation, SignedUrlError
from .domain_policy import WhitelistConfig, validate_domains
from .input_collector import collect_urls
from .redirects import resolve_outcome


logger = logging.getLogger(__name__)

MAX_URLS = 50


def check_bounds(urls: list[str], *, max_length: int = MAX_URLS) -> None:
    n = len(urls)
    if n > max_length:
        raise BoundViolation(f"The list length ({n}) exceeds the maximum allowed length of {max_length}.")
    if n < 1:
        raise BoundViolation("At least one url should be included.")


def _aggregate(outcomes: list) -> BatchSuccess | BatchError:
    errors = [o for o in outcomes if isinstance(o, Failed)]
    if errors:
        details = "; ".join(f'URL[{e.index}] "{e.url}": {e.error_message}' for e in errors)
        return BatchError(f"Failed to fetch redirects for {len(errors)} URL(s): {details}")
    ordered = sorted(outcomes, key=lambda o: o.index)
    return BatchSuccess(signed_urls=[o.final_url for o in ordered])


async def resolve_batch(
    urls: list[str],
    *,
    prober: Prober,
    whitelist: WhitelistConfig,
    api_key: str | None,
) -> BatchSuccess | BatchError:
    """全URLを並列に解決し、1件でも失敗があればバッチ全体をエラーにする。"""
    outcomes = await asyncio.gather(
        *(
            resolve_outcome(
                url,
                index=i,
                prober=prober,
                api_key=api_key,
                requires_auth=whitelist.requires_auth,
            )
            for i, url in enumerate(urls)
        )
    )
    return _aggregate(list(outcomes))


async def sign_urls(
    *,
    list_mode: bool,
    single_url: str | None,
    url_list: PagedList | None,
    prober: Prober,
    whitelist: WhitelistConfig,
    api_key: str | None,
) -> BatchSuccess | BatchError:
    """
    署名URL取得アクションの本体。
    入力収集 -> 件数検証 -> ドメイン検証 -> 並列リダイレクト解決 の順に処理し、
    例外は外に出さず BatchError に変換して返す。
    """
    try:
        urls = await collect_urls(list_mode=list_mode, single_url=single_url, url_list=url_list)
        logger.info("signing %d URL(s) (list_mode=%s)", len(urls), list_mode)
        check_bounds(urls)
        validate_domains(urls, whitelist)
        result = await resolve_batch(urls, prober=prober, whitelist=whitelist, api_key=api_key)
    except SignedUrlError as e:
        logger.warning("batch rejected: %s", e)
        return BatchError(str(e))
    except Exception as e:
        logger.exception("unexpected error while fetching redirects")
        return BatchError(f"An error occurred while fetching redirects: {e}")

    if isinstance(result, BatchError):
        logger.warning(result.message)
    else:
        logger.info("resolved %d URL(s)", len(result.signed_urls))
    return result
