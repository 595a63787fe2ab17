"""
Contract ABI package for the testnet token deployer.
"""

from .erc20 import TESTNET_ERC20_ABI

__all__ = [
    'TESTNET_ERC20_ABI',
]
