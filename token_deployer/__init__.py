"""
Testnet ERC20 deployer: deploys test tokens and funds the deterministic dev accounts.
"""

__version__ = "0.1.0"
