#!/usr/bin/env python3
"""
Entry point for running the deployer as a module.

Usage:
    python -m token_deployer add --token-name "Wrapped BTC" --symbol WBTC --decimals 8
    python -m token_deployer add-multi '[{"address": null, "name": "DAI", "symbol": "DAI", "decimals": 18}]'
"""
from token_deployer.setup.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
