#!/usr/bin/env python3
"""Compiled contract lookup.

Supports the layouts our toolchains produce:

- Hardhat/Waffle JSON artifacts: ``**/<Name>.json`` with ``abi`` and ``bytecode``
  (``bytecode`` may be a hex string or ``{"object": ...}``)
- ``abi/<Name>.json`` + ``bytecode/<Name>.bin`` (scripts/compile_all layout)
- ``<Name>.abi`` + ``<Name>.bin`` side by side
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from token_deployer.errors import ConfigError

__all__ = ["TESTNET_ERC20_CONTRACT", "ContractCode", "read_contract_code"]

TESTNET_ERC20_CONTRACT = "TestnetERC20Token"


@dataclass(frozen=True)
class ContractCode:
    name: str
    abi: list[dict[str, Any]]
    bytecode: str


def _normalize_bytecode(bytecode: Any, source: Path) -> str:
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")
    if not isinstance(bytecode, str) or not bytecode.strip():
        raise ConfigError(f"No bytecode in {source}")
    bytecode = bytecode.strip()
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if len(bytecode) <= 2:
        raise ConfigError(f"Empty bytecode in {source}")
    try:
        int(bytecode[2:], 16)
    except ValueError:
        raise ConfigError(f"Bytecode in {source} is not hex (unlinked libraries?)") from None
    return bytecode


def _read_text(path: Path) -> str:
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read artifact {path}: {e}") from e


def _read_json(path: Path) -> Any:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Cannot read artifact {path}: {e}") from e


def _from_json_artifact(name: str, path: Path) -> ContractCode:
    data = _read_json(path)
    if not isinstance(data, dict) or "abi" not in data:
        raise ConfigError(f"Artifact {path} has no ABI")
    bytecode = data.get("bytecode")
    if bytecode is None:
        evm = data.get("evm", {})
        if not isinstance(evm, dict):
            raise ConfigError(f"Artifact {path}: evm must be an object")
        bytecode = evm.get("bytecode")
    return ContractCode(name=name, abi=data["abi"], bytecode=_normalize_bytecode(bytecode, path))


def _from_abi_bin(name: str, abi_path: Path, bin_path: Path) -> ContractCode:
    abi = _read_json(abi_path)
    if not isinstance(abi, list):
        raise ConfigError(f"ABI in {abi_path} must be a JSON array")
    return ContractCode(name=name, abi=abi, bytecode=_normalize_bytecode(_read_text(bin_path), bin_path))


def read_contract_code(name: str, artifacts_dir: Path) -> ContractCode:
    """Load ABI and creation bytecode for contract ``name`` from ``artifacts_dir``."""
    artifacts_dir = Path(artifacts_dir)
    if not artifacts_dir.is_dir():
        raise ConfigError(f"Artifacts directory not found: {artifacts_dir}")

    split_abi = artifacts_dir / "abi" / f"{name}.json"
    split_bin = artifacts_dir / "bytecode" / f"{name}.bin"
    if split_abi.exists() and split_bin.exists():
        return _from_abi_bin(name, split_abi, split_bin)

    pair_abi = artifacts_dir / f"{name}.abi"
    pair_bin = artifacts_dir / f"{name}.bin"
    if pair_abi.exists() and pair_bin.exists():
        return _from_abi_bin(name, pair_abi, pair_bin)

    # Hardhat nests artifacts as <Source>.sol/<Name>.json; skip *.dbg.json
    for path in sorted(artifacts_dir.rglob(f"{name}.json")):
        if path.parent.name == "abi":
            continue
        return _from_json_artifact(name, path)

    raise ConfigError(f"No build artifacts for {name} under {artifacts_dir}")
