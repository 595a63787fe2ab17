"""Run configuration for the token deployer.

Everything is read once at process start into an immutable ``DeployConfig``.
Seed phrases come from the environment (optionally loaded from an env file
with python-dotenv) or from the shared test-config ``eth.json``.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from token_deployer.config.network import (
    DEFAULT_DEPLOYER_INDEX,
    DEFAULT_HD_PATH_TEMPLATE,
    DEFAULT_TEST_ROSTER_SIZE,
    DEPLOY_GAS_LIMIT,
    DEPLOY_NONCE_OFFSET,
    MINT_GAS_LIMIT,
    RECEIPT_TIMEOUT,
    TEST_CONFIG_SUBPATH,
    get_rpc_url,
)
from token_deployer.errors import ConfigError

__all__ = ["DeployConfig", "load_config", "load_test_config"]


@dataclass(frozen=True)
class DeployConfig:
    rpc_url: str
    deployer_mnemonic: str
    test_mnemonic: str
    deployer_index: int = DEFAULT_DEPLOYER_INDEX
    roster_size: int = DEFAULT_TEST_ROSTER_SIZE
    path_template: str = DEFAULT_HD_PATH_TEMPLATE
    artifacts_dir: Path = Path("artifacts")
    deploy_gas_limit: int = DEPLOY_GAS_LIMIT
    mint_gas_limit: int = MINT_GAS_LIMIT
    deploy_nonce_offset: int = DEPLOY_NONCE_OFFSET
    receipt_timeout: int = RECEIPT_TIMEOUT

    def __repr__(self) -> str:
        # keep seed phrases out of logs and tracebacks
        return (
            f"DeployConfig(rpc_url={self.rpc_url!r}, deployer_index={self.deployer_index}, "
            f"roster_size={self.roster_size}, artifacts_dir={str(self.artifacts_dir)!r})"
        )


def _test_config_path() -> Path | None:
    explicit = os.getenv("TEST_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    home = os.getenv("ZKSYNC_HOME")
    if home:
        return Path(home) / TEST_CONFIG_SUBPATH
    return None


def load_test_config(path: Path | None = None) -> dict[str, Any]:
    """Read the shared ``eth.json`` test config (``mnemonic`` / ``test_mnemonic``).

    Returns an empty dict when no path is configured. A configured path that
    is missing or not a JSON object raises ConfigError.
    """
    path = path or _test_config_path()
    if path is None:
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read test config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Test config {path} must be a JSON object")
    return data


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def load_config(*, env_file: str | None = None, rpc_url: str | None = None) -> DeployConfig:
    """Build the run configuration from env vars, an optional env file and eth.json.

    Precedence: explicit arguments > environment > test config file.
    """
    if env_file:
        if not Path(env_file).exists():
            raise ConfigError(f"Env file not found: {env_file}")
        load_dotenv(env_file)

    test_config = load_test_config()
    deployer_mnemonic = os.getenv("DEPLOYER_MNEMONIC") or test_config.get("mnemonic")
    test_mnemonic = os.getenv("TEST_MNEMONIC") or test_config.get("test_mnemonic")
    if not deployer_mnemonic:
        raise ConfigError("Deployer seed phrase not set (DEPLOYER_MNEMONIC or 'mnemonic' in eth.json)")
    if not test_mnemonic:
        raise ConfigError("Test seed phrase not set (TEST_MNEMONIC or 'test_mnemonic' in eth.json)")

    path_template = os.getenv("HD_PATH_TEMPLATE") or DEFAULT_HD_PATH_TEMPLATE
    if "{index}" not in path_template:
        raise ConfigError(f"HD_PATH_TEMPLATE must contain '{{index}}': {path_template!r}")

    return DeployConfig(
        rpc_url=get_rpc_url(rpc_url),
        deployer_mnemonic=str(deployer_mnemonic).strip(),
        test_mnemonic=str(test_mnemonic).strip(),
        deployer_index=_int_env("DEPLOYER_INDEX", DEFAULT_DEPLOYER_INDEX),
        roster_size=_int_env("TEST_ROSTER_SIZE", DEFAULT_TEST_ROSTER_SIZE),
        path_template=path_template,
        artifacts_dir=Path(os.getenv("ARTIFACTS_DIR") or "artifacts"),
        deploy_gas_limit=_int_env("DEPLOY_GAS_LIMIT", DEPLOY_GAS_LIMIT, minimum=21000),
        mint_gas_limit=_int_env("MINT_GAS_LIMIT", MINT_GAS_LIMIT, minimum=21000),
        deploy_nonce_offset=_int_env("DEPLOY_NONCE_OFFSET", DEPLOY_NONCE_OFFSET),
        receipt_timeout=_int_env("RECEIPT_TIMEOUT", RECEIPT_TIMEOUT, minimum=1),
    )
