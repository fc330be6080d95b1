from fastapi import FastAPI

from .api import actions
from .settings import settings
from .utils.logging import setup_logging


setup_logging(settings.log_level, secrets=[settings.api_key, settings.action_api_key])

app = FastAPI(
    title="URL Signer Action",
    version="0.1.0",
    description="ファイルURLのリダイレクト先（署名URL）をまとめて取得するサーバーサイドアクション",
)

app.include_router(actions.router, prefix="/actions", tags=["actions"])


@app.get("/healthz", tags=["health"])
def healthcheck() -> dict:
    """簡易ヘルスチェック"""
    return {"status": "ok"}
