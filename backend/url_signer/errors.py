from __future__ import annotations


class SignedUrlError(ValueError):
    """署名URL取得アクションで発生するエラーの基底。"""


class BoundViolation(SignedUrlError):
    """URL件数が0件、または上限超過。"""


class DomainViolation(SignedUrlError):
    """allowlist外のドメインを含むバッチ。"""


class UrlResolutionError(SignedUrlError):
    """URL単位の解決失敗。元のURLとバッチ内のindexを保持する。"""

    def __init__(self, message: str, *, url: str, index: int | None = None):
        super().__init__(message)
        self.url = url
        self.index = index


class InvalidUrlFormat(UrlResolutionError):
    pass


class InsecureSchemeRejected(UrlResolutionError):
    pass


class ProbeFailed(UrlResolutionError):
    pass
