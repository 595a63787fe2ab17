#!/usr/bin/env python3
from __future__ import annotations

from eth_account import Account
from eth_account.signers.local import LocalAccount

from token_deployer.config.network import DEFAULT_HD_PATH_TEMPLATE
from token_deployer.config.settings import DeployConfig
from token_deployer.errors import ConfigError

__all__ = ["derivation_path", "derive_account", "derive_deployer", "derive_test_roster"]


def derivation_path(path_template: str, index: int) -> str:
    if "{index}" not in path_template:
        raise ConfigError(f"Derivation path template must contain '{{index}}': {path_template!r}")
    if index < 0:
        raise ConfigError(f"Derivation index must be >= 0, got {index}")
    return path_template.format(index=index)


def derive_account(mnemonic: str, index: int, path_template: str = DEFAULT_HD_PATH_TEMPLATE) -> LocalAccount:
    """Derive the account at ``index`` from a BIP-39 mnemonic.

    Raises ConfigError if the mnemonic or path is malformed.
    """
    if not isinstance(mnemonic, str) or not mnemonic.strip():
        raise ConfigError("Seed phrase is empty")
    path = derivation_path(path_template, index)
    # Enable HD wallet features (eth-account marks as unaudited)
    Account.enable_unaudited_hdwallet_features()
    try:
        return Account.from_mnemonic(mnemonic.strip(), account_path=path)
    except Exception as e:
        raise ConfigError(f"Cannot derive account at {path}: {e}") from e


def derive_deployer(config: DeployConfig) -> LocalAccount:
    return derive_account(config.deployer_mnemonic, config.deployer_index, config.path_template)


def derive_test_roster(config: DeployConfig) -> tuple[LocalAccount, ...]:
    """Derive the test roster: indices 0..roster_size-1 from the test mnemonic."""
    return tuple(
        derive_account(config.test_mnemonic, i, config.path_template)
        for i in range(config.roster_size)
    )
