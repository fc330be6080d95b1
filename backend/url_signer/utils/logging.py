import logging
import re
import sys
from typing import Iterable, Optional


_BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE)


class RedactSecretsFilter(logging.Filter):
    """ログレコードからBearerトークンと設定済みのシークレットを伏せ字にする。"""

    mask = "***"

    def __init__(self, secrets: Iterable[Optional[str]] = ()):
        super().__init__()
        self.secrets = [s for s in secrets if s]

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, self.mask)
        return _BEARER_RE.sub(r"\1" + self.mask, text)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(level: Optional[str] = "INFO", *, secrets: Iterable[Optional[str]] = ()) -> None:
    """
    アプリ全体のロギングを設定する。
    api_key などのシークレットはハンドラ側のフィルタで伏せ字にしてから出力する。
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # リロード時のハンドラ重複を防ぐ
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.addFilter(RedactSecretsFilter(secrets))
    root_logger.addHandler(handler)
