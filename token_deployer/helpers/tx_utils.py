"""
Transaction helpers shared by the deployer and the minter.

Everything here is blocking: a transaction is signed, broadcast and awaited
before control returns, so a single account never has two transactions in
flight.
"""
from __future__ import annotations

import logging
from typing import Any

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.types import TxParams, TxReceipt

__all__ = [
    "PRIORITY_FEE_GWEI",
    "pending_nonce",
    "fee_fields",
    "raw_tx_bytes",
    "sign_send_wait",
]

logger = logging.getLogger(__name__)

PRIORITY_FEE_GWEI = 1


def pending_nonce(w3: Web3, address: str) -> int:
    """Transaction count of ``address`` including pending transactions."""
    return int(w3.eth.get_transaction_count(address, "pending"))


def _is_eip1559_supported(w3: Web3) -> bool:
    try:
        blk = w3.eth.get_block("latest")
        return "baseFeePerGas" in blk
    except Exception:
        return False


def fee_fields(w3: Web3) -> dict[str, int]:
    """Fee fields for a new transaction: EIP-1559 when the chain supports it, legacy otherwise."""
    if _is_eip1559_supported(w3):
        base_fee = int(w3.eth.get_block("latest")["baseFeePerGas"])
        priority_fee = int(Web3.to_wei(PRIORITY_FEE_GWEI, "gwei"))
        return {
            "maxFeePerGas": base_fee * 2 + priority_fee,
            "maxPriorityFeePerGas": priority_fee,
        }
    return {"gasPrice": int(w3.eth.gas_price)}


def raw_tx_bytes(signed: Any) -> bytes:
    # Support eth-account variants: rawTransaction (v0.5.x) vs raw_transaction (v0.9+)
    raw = getattr(signed, "raw_transaction", None)
    if raw is None:
        raw = getattr(signed, "rawTransaction", None)
    if raw is None:
        raise AttributeError("SignedTransaction missing raw_transaction/rawTransaction")
    return raw


def sign_send_wait(w3: Web3, account: LocalAccount, tx: TxParams, timeout: int) -> TxReceipt:
    """Sign ``tx`` with ``account``, broadcast it and wait for the receipt.

    Errors from the provider propagate unchanged; callers wrap them into
    their own error type.
    """
    signed = account.sign_transaction(tx)
    tx_hash = w3.eth.send_raw_transaction(raw_tx_bytes(signed))
    logger.debug("Broadcast tx %s (nonce %s)", Web3.to_hex(tx_hash), tx.get("nonce"))
    return w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
