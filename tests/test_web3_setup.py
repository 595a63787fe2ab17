import logging

import pytest
from web3 import Web3

from token_deployer.config.logging_config import ROOT_LOGGER_NAME, setup_logger
from token_deployer.errors import ConfigError
from token_deployer.helpers.web3_setup import build_web3


def test_build_web3_uses_http_provider():
    w3 = build_web3("http://127.0.0.1:8545")
    assert isinstance(w3, Web3)
    assert w3.provider.endpoint_uri == "http://127.0.0.1:8545"


@pytest.mark.parametrize("url", ["", "ws://127.0.0.1:8546", "127.0.0.1:8545"])
def test_build_web3_rejects_bad_endpoint(url):
    with pytest.raises(ConfigError):
        build_web3(url)


def test_setup_logger_writes_files_when_log_dir_set(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    logger = setup_logger(ROOT_LOGGER_NAME, level=logging.DEBUG, console=False)
    logger.error("deploy failed")
    for handler in logger.handlers:
        handler.flush()
    assert "deploy failed" in (tmp_path / f"{ROOT_LOGGER_NAME}.log").read_text()
    assert "deploy failed" in (tmp_path / f"{ROOT_LOGGER_NAME}_errors.log").read_text()
    for handler in logger.handlers:
        handler.close()


def test_setup_logger_does_not_duplicate_handlers(monkeypatch):
    monkeypatch.delenv("LOG_DIR", raising=False)
    first = setup_logger(ROOT_LOGGER_NAME)
    count = len(first.handlers)
    assert setup_logger(ROOT_LOGGER_NAME) is first
    assert len(first.handlers) == count == 1
