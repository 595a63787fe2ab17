"""
Web3 setup helper - builds the provider connection for a deployment run.

Public API
----------
build_web3(rpc_url)
    Return a Web3 instance connected to ``rpc_url`` with the POA
    extra-data middleware injected (dev chains such as geth --dev need it).
"""
from __future__ import annotations

import logging

from web3 import Web3

from token_deployer.errors import ConfigError

__all__ = ["build_web3"]

logger = logging.getLogger(__name__)


def _inject_poa_middleware(w3: Web3) -> None:
    try:
        # web3.py v7
        from web3.middleware import ExtraDataToPOAMiddleware

        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        return
    except ImportError:
        pass
    try:
        # web3.py v6
        from web3.middleware import geth_poa_middleware

        w3.middleware_onion.inject(geth_poa_middleware, layer=0)
    except ImportError:
        logger.debug("No POA middleware available in this web3 version")


def build_web3(rpc_url: str) -> Web3:
    """
    Build a Web3 instance for the given provider endpoint.

    Args:
        rpc_url: HTTP(S) endpoint of the chain provider.

    Returns:
        Web3 instance

    Raises:
        ConfigError: If the endpoint is empty or not an HTTP(S) URL
    """
    if not rpc_url or not rpc_url.startswith(("http://", "https://")):
        raise ConfigError(f"Invalid provider endpoint: {rpc_url!r}")
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    _inject_poa_middleware(w3)
    logger.debug("Connected provider %s", rpc_url)
    return w3
