"""
Network configuration for the testnet token deployer.

Contains the provider endpoint defaults, HD derivation defaults and the
transaction limits used when deploying and funding test tokens.
"""

import os


# =============================================================================
# PROVIDER
# =============================================================================

# Local dev node (geth --dev / anvil / hardhat) when nothing else is configured
DEFAULT_RPC_URL: str = "http://127.0.0.1:8545"

# Env vars consulted for the provider endpoint, in order
RPC_URL_ENV_VARS: tuple[str, ...] = ("RPC_URL", "ETH_CLIENT_WEB3_URL")


# =============================================================================
# ACCOUNTS
# =============================================================================

# BIP-44 Ethereum path; {index} is the address index
DEFAULT_HD_PATH_TEMPLATE: str = "m/44'/60'/0'/0/{index}"

DEFAULT_DEPLOYER_INDEX: int = 1
DEFAULT_TEST_ROSTER_SIZE: int = 10

# Relative to $ZKSYNC_HOME
TEST_CONFIG_SUBPATH: str = "etc/test_config/constant/eth.json"


# =============================================================================
# TRANSACTIONS
# =============================================================================

# Generous ceiling so deployments land even on a congested dev chain
DEPLOY_GAS_LIMIT: int = 30_000_000
MINT_GAS_LIMIT: int = 1_000_000

# Added to the pending transaction count for contract creation
DEPLOY_NONCE_OFFSET: int = 1

RECEIPT_TIMEOUT: int = 120  # seconds


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_rpc_url(override: str | None = None) -> str:
    """Get the provider endpoint.

    Uses the explicit override if given, then RPC_URL / ETH_CLIENT_WEB3_URL,
    then the local dev node default.
    """
    if override:
        return override
    for name in RPC_URL_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return DEFAULT_RPC_URL
