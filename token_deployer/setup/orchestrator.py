#!/usr/bin/env python3
from __future__ import annotations

import logging
from collections.abc import Iterable

from .context import DeployContext
from .deploy_erc20 import deploy_token
from .mint import fund_accounts
from .tokens import TokenDescriptor, TokenState

__all__ = ["deploy_and_fund", "deploy_many"]

logger = logging.getLogger(__name__)


def _transition(token: TokenDescriptor, state: TokenState, new: TokenState) -> TokenState:
    if state.terminal:
        raise RuntimeError(f"{token.symbol}: cannot leave terminal state {state.value}")
    logger.debug("%s: %s -> %s", token.symbol, state.value, new.value)
    return new


def deploy_and_fund(ctx: DeployContext, token: TokenDescriptor) -> TokenDescriptor:
    """Deploy ``token``, fund the deployer and roster, return it with its address set."""
    state = TokenState.PENDING
    try:
        address = deploy_token(ctx, token)
        result = token.with_address(address)
        state = _transition(token, state, TokenState.DEPLOYED)
        fund_accounts(ctx, address)
        state = _transition(token, state, TokenState.FUNDED)
    except Exception as e:
        _transition(token, state, TokenState.FAILED)
        logger.error("%s failed: %s", token.symbol, e)
        raise
    return result


def deploy_many(ctx: DeployContext, tokens: Iterable[TokenDescriptor]) -> list[TokenDescriptor]:
    """Deploy and fund tokens one after another, in input order.

    The next token starts only after the previous one is fully funded; the
    first error aborts the batch.
    """
    results: list[TokenDescriptor] = []
    for token in tokens:
        results.append(deploy_and_fund(ctx, token))
    return results
