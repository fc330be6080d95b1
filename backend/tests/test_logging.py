"""Tests for the secret-redacting log setup"""

import logging

import pytest

from url_signer.utils.logging import RedactSecretsFilter, setup_logging


def _record(msg, *args):
    return logging.LogRecord("url_signer.test", logging.WARNING, __file__, 1, msg, args, None)


class TestRedactSecretsFilter:
    def test_configured_secret_is_masked(self):
        record = _record("probe failed with key %s", "s3cr3t-token")
        assert RedactSecretsFilter(["s3cr3t-token"]).filter(record) is True
        assert record.getMessage() == "probe failed with key ***"

    def test_bearer_header_is_masked_without_configured_secret(self):
        record = _record("sent headers {'Authorization': 'Bearer abc.def'}")
        RedactSecretsFilter([None]).filter(record)
        assert record.getMessage() == "sent headers {'Authorization': 'Bearer ***'}"

    def test_plain_message_is_untouched(self):
        record = _record("resolved %d URL(s)", 3)
        RedactSecretsFilter(["s3cr3t-token"]).filter(record)
        assert record.args == (3,)
        assert record.getMessage() == "resolved 3 URL(s)"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_installs_single_redacting_handler(restore_root_logger, capsys):
    setup_logging("warning", secrets=["s3cr3t-token"])
    setup_logging("warning", secrets=["s3cr3t-token"])
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.WARNING

    logging.getLogger("url_signer.test").warning("retrying with %s", "s3cr3t-token")
    out = capsys.readouterr().out
    assert "s3cr3t-token" not in out
    assert "| WARNING | url_signer.test | retrying with ***" in out
