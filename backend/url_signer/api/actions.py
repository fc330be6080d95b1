from typing import Union

from fastapi import APIRouter, Depends, Header, HTTPException, status

from ..agents.base import BatchError, StaticPagedList
from ..agents.fetchers import HttpxProber
from ..schemas import ActionErrorResponse, SignedUrlsResponse, SignUrlsRequest
from ..services.domain_policy import parse_whitelist
from ..services.signed_urls import sign_urls
from ..settings import settings


router = APIRouter()


def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
    """アクション呼び出し用の簡易APIキー認証。settings.action_api_key が未設定なら無効化。"""
    if settings.action_api_key is None:
        return  # 未設定なら認証スキップ（開発用）
    if x_api_key != settings.action_api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@router.post(
    "/signed-urls",
    response_model=Union[SignedUrlsResponse, ActionErrorResponse],
    dependencies=[Depends(require_api_key)],
)
async def run_sign_urls(payload: SignUrlsRequest) -> Union[SignedUrlsResponse, ActionErrorResponse]:
    whitelist = parse_whitelist(settings.whitelisted_domains, default_domain=settings.trusted_default_domain)
    async with HttpxProber(timeout=settings.probe_timeout) as prober:
        result = await sign_urls(
            list_mode=payload.file_list,
            single_url=payload.file_url,
            url_list=StaticPagedList(payload.file_urls),
            prober=prober,
            whitelist=whitelist,
            api_key=settings.api_key,
        )
    if isinstance(result, BatchError):
        return ActionErrorResponse(error_message=result.message)
    return SignedUrlsResponse(signed_urls=result.signed_urls)
