"""
Configuration package for the testnet token deployer.
"""

from token_deployer.config.network import (
    DEFAULT_RPC_URL,
    DEFAULT_HD_PATH_TEMPLATE,
    DEFAULT_DEPLOYER_INDEX,
    DEFAULT_TEST_ROSTER_SIZE,
    DEPLOY_GAS_LIMIT,
    MINT_GAS_LIMIT,
    DEPLOY_NONCE_OFFSET,
    RECEIPT_TIMEOUT,
    get_rpc_url,
)

from token_deployer.config.settings import (
    DeployConfig,
    load_config,
    load_test_config,
)

from token_deployer.config.abis import (
    TESTNET_ERC20_ABI
)

__all__ = [
    # Network
    'DEFAULT_RPC_URL',
    'DEFAULT_HD_PATH_TEMPLATE',
    'DEFAULT_DEPLOYER_INDEX',
    'DEFAULT_TEST_ROSTER_SIZE',
    'DEPLOY_GAS_LIMIT',
    'MINT_GAS_LIMIT',
    'DEPLOY_NONCE_OFFSET',
    'RECEIPT_TIMEOUT',
    'get_rpc_url',

    # Settings
    'DeployConfig',
    'load_config',
    'load_test_config',

    # ABIs
    'TESTNET_ERC20_ABI',
]
