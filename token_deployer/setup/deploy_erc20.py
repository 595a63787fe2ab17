#!/usr/bin/env python3
from __future__ import annotations

import logging

from eth_utils import to_checksum_address
from web3 import Web3
from web3.types import TxParams

from token_deployer.errors import DeploymentError
from token_deployer.helpers.tx_utils import fee_fields, pending_nonce, sign_send_wait
from .context import DeployContext
from .tokens import TokenDescriptor

__all__ = ["next_deploy_nonce", "build_deploy_tx", "deploy_token"]

logger = logging.getLogger(__name__)


def next_deploy_nonce(w3: Web3, address: str, offset: int) -> int:
    """Pending transaction count plus ``offset``.

    Read at call time, not from a confirmed state: only valid while the
    account has no other transaction in flight.
    """
    return pending_nonce(w3, address) + offset


def build_deploy_tx(ctx: DeployContext, token: TokenDescriptor, nonce: int) -> TxParams:
    factory = ctx.w3.eth.contract(abi=ctx.contract.abi, bytecode=ctx.contract.bytecode)
    params: TxParams = {
        "from": ctx.deployer_address,
        "nonce": nonce,
        "gas": ctx.config.deploy_gas_limit,
        "chainId": ctx.w3.eth.chain_id,
        "value": 0,
        **fee_fields(ctx.w3),
    }
    return factory.constructor(token.name, token.symbol, token.decimals).build_transaction(params)


def deploy_token(ctx: DeployContext, token: TokenDescriptor) -> str:
    """Deploy the testnet ERC20 for ``token`` and return its checksummed address.

    Raises DeploymentError on any rejection, network error or failed receipt.
    No retry.
    """
    try:
        nonce = next_deploy_nonce(ctx.w3, ctx.deployer_address, ctx.config.deploy_nonce_offset)
        ctx.record_nonce(nonce)
        logger.info("Deploying %s (%s, %d decimals) with nonce %d", token.symbol, token.name, token.decimals, nonce)
        tx = build_deploy_tx(ctx, token, nonce)
        receipt = sign_send_wait(ctx.w3, ctx.deployer, tx, ctx.config.receipt_timeout)
    except Exception as e:
        raise DeploymentError(f"Deployment of {token.symbol} failed: {e}") from e

    if int(receipt.get("status", 0)) != 1:
        raise DeploymentError(f"Deployment of {token.symbol} reverted (tx {Web3.to_hex(receipt['transactionHash'])})")
    address = receipt.get("contractAddress")
    if not address:
        raise DeploymentError(f"Deployment of {token.symbol} mined without a contract address")

    address = to_checksum_address(address)
    logger.info("%s deployed at %s (gas used %s)", token.symbol, address, receipt.get("gasUsed"))
    return address
