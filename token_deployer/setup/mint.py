#!/usr/bin/env python3
from __future__ import annotations

import logging

from eth_utils import to_checksum_address
from web3 import Web3
from web3.contract import Contract

from token_deployer.config.abis import TESTNET_ERC20_ABI
from token_deployer.errors import MintError
from token_deployer.helpers.tx_utils import fee_fields, pending_nonce, sign_send_wait
from .context import DeployContext

__all__ = ["INITIAL_MINT_AMOUNT", "token_contract", "mint", "fund_accounts"]

logger = logging.getLogger(__name__)

# 3e9 whole tokens at 18 decimals, applied regardless of the token's own
# decimals; dev fixtures depend on this exact magnitude.
INITIAL_MINT_AMOUNT = Web3.to_wei(3_000_000_000, "ether")


def token_contract(ctx: DeployContext, address: str) -> Contract:
    abi = ctx.contract.abi or TESTNET_ERC20_ABI
    return ctx.w3.eth.contract(address=to_checksum_address(address), abi=abi)


def mint(ctx: DeployContext, token: Contract, to: str, amount: int) -> None:
    """Mint ``amount`` of ``token`` to ``to`` and wait until it is mined."""
    to = to_checksum_address(to)
    try:
        nonce = pending_nonce(ctx.w3, ctx.deployer_address)
        ctx.record_nonce(nonce)
        tx = token.functions.mint(to, amount).build_transaction(
            {
                "from": ctx.deployer_address,
                "nonce": nonce,
                "gas": ctx.config.mint_gas_limit,
                "chainId": ctx.w3.eth.chain_id,
                **fee_fields(ctx.w3),
            }
        )
        receipt = sign_send_wait(ctx.w3, ctx.deployer, tx, ctx.config.receipt_timeout)
    except Exception as e:
        raise MintError(f"Mint to {to} on {token.address} failed: {e}") from e

    if int(receipt.get("status", 0)) != 1:
        raise MintError(f"Mint to {to} on {token.address} reverted (tx {Web3.to_hex(receipt['transactionHash'])})")
    logger.debug("Minted %d to %s (nonce %d)", amount, to, nonce)


def fund_accounts(ctx: DeployContext, token_address: str, amount: int = INITIAL_MINT_AMOUNT) -> list[str]:
    """Mint ``amount`` to the deployer, then to each roster account in order.

    Stops at the first failure; accounts already minted keep their balance.
    Returns the funded addresses in mint order.
    """
    token = token_contract(ctx, token_address)
    recipients = [ctx.deployer_address] + [acct.address for acct in ctx.roster]
    funded: list[str] = []
    for to in recipients:
        mint(ctx, token, to, amount)
        funded.append(to)
    logger.info("Funded %d accounts on %s", len(funded), token_address)
    return funded
