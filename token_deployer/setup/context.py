#!/usr/bin/env python3
"""Run context: provider, signing identities and contract code for one run.

Built once by ``build_context`` and passed to every component instead of
module-level provider/wallet globals.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from eth_account.signers.local import LocalAccount
from web3 import Web3

from token_deployer.config.settings import DeployConfig
from token_deployer.helpers.web3_setup import build_web3
from .accounts import derive_deployer, derive_test_roster
from .artifacts import TESTNET_ERC20_CONTRACT, ContractCode, read_contract_code

__all__ = ["DeployContext", "build_context"]

logger = logging.getLogger(__name__)


@dataclass
class DeployContext:
    config: DeployConfig
    w3: Web3
    deployer: LocalAccount
    roster: tuple[LocalAccount, ...]
    contract: ContractCode
    # Every nonce the deployer has used this run, in issue order
    nonces: list[int] = field(default_factory=list)

    @property
    def deployer_address(self) -> str:
        return self.deployer.address

    def record_nonce(self, nonce: int) -> None:
        """Register a nonce about to be used; it must exceed every earlier one."""
        if self.nonces and nonce <= self.nonces[-1]:
            raise ValueError(f"nonce {nonce} is not above last used nonce {self.nonces[-1]}")
        self.nonces.append(nonce)


def build_context(config: DeployConfig, w3: Web3 | None = None) -> DeployContext:
    """Derive accounts, load contract code and connect the provider.

    ``w3`` lets callers supply an already configured provider.
    """
    deployer = derive_deployer(config)
    roster = derive_test_roster(config)
    contract = read_contract_code(TESTNET_ERC20_CONTRACT, config.artifacts_dir)
    if w3 is None:
        w3 = build_web3(config.rpc_url)
    logger.info("Deployer: %s (index %d)", deployer.address, config.deployer_index)
    logger.debug("Test roster: %s", ", ".join(a.address for a in roster))
    return DeployContext(config=config, w3=w3, deployer=deployer, roster=roster, contract=contract)
