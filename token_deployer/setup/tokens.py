#!/usr/bin/env python3
from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from eth_utils import is_address, to_checksum_address

from token_deployer.errors import ArgumentError, DeploymentError

__all__ = ["TokenDescriptor", "TokenState", "parse_token", "parse_token_batch", "dump_tokens"]

MAX_DECIMALS = 255  # uint8 constructor argument


class TokenState(str, Enum):
    PENDING = "pending"
    DEPLOYED = "deployed"
    FUNDED = "funded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (TokenState.FUNDED, TokenState.FAILED)


@dataclass(frozen=True)
class TokenDescriptor:
    """One fungible test token. ``address`` stays None until it is deployed."""

    name: str
    symbol: str
    decimals: int
    address: str | None = None

    @property
    def deployed(self) -> bool:
        return self.address is not None

    def with_address(self, address: str) -> TokenDescriptor:
        if self.address is not None:
            raise DeploymentError(f"{self.symbol} already deployed at {self.address}")
        if not is_address(address):
            raise DeploymentError(f"Malformed contract address for {self.symbol}: {address!r}")
        return replace(self, address=to_checksum_address(address))

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
        }


def _parse_decimals(value: Any, where: str) -> int:
    # bool is an int subclass; strings would not survive the JSON round trip
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError(f"{where}: decimals must be an integer, got {value!r}")
    if not 0 <= value <= MAX_DECIMALS:
        raise ArgumentError(f"{where}: decimals must be between 0 and {MAX_DECIMALS}, got {value}")
    return value


def _parse_text(value: Any, field: str, where: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ArgumentError(f"{where}: {field} must be a non-empty string, got {value!r}")
    return value


def parse_token(name: Any, symbol: Any, decimals: Any, *, where: str = "token") -> TokenDescriptor:
    """Validate discrete fields into an undeployed TokenDescriptor."""
    return TokenDescriptor(
        name=_parse_text(name, "name", where),
        symbol=_parse_text(symbol, "symbol", where),
        decimals=_parse_decimals(decimals, where),
    )


def parse_token_batch(tokens_json: str) -> list[TokenDescriptor]:
    """Parse and validate a JSON array of token descriptors.

    Every entry is checked before anything touches the chain, so a bad
    entry at the end of a batch fails the whole run up front.
    """
    try:
        data = json.loads(tokens_json)
    except json.JSONDecodeError as e:
        raise ArgumentError(f"tokens_json is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ArgumentError(f"tokens_json must be a JSON array, got {type(data).__name__}")

    tokens: list[TokenDescriptor] = []
    for i, entry in enumerate(data):
        where = f"tokens[{i}]"
        if not isinstance(entry, dict):
            raise ArgumentError(f"{where}: expected an object, got {type(entry).__name__}")
        if entry.get("address") is not None:
            raise ArgumentError(f"{where}: address must be null for a token to deploy")
        tokens.append(parse_token(entry.get("name"), entry.get("symbol"), entry.get("decimals"), where=where))
    return tokens


def dump_tokens(result: TokenDescriptor | list[TokenDescriptor]) -> str:
    """Render one result or a list of results as indented JSON."""
    if isinstance(result, list):
        return json.dumps([t.to_dict() for t in result], indent=2)
    return json.dumps(result.to_dict(), indent=2)
