"""Error taxonomy for token deployment runs.

Nothing here is recovered locally: every error bubbles to the CLI, which
reports ``kind`` and the message and exits with status 1.
"""
from __future__ import annotations

__all__ = [
    "TokenDeployError",
    "ConfigError",
    "DeploymentError",
    "MintError",
    "ArgumentError",
]


class TokenDeployError(Exception):
    """Base class for all deployer errors."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def as_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": str(self)}


class ConfigError(TokenDeployError):
    """Missing or malformed seed phrase, provider endpoint or contract code."""


class DeploymentError(TokenDeployError):
    """Contract-creation transaction rejected or not mined."""


class MintError(TokenDeployError):
    """Mint transaction rejected or not mined."""


class ArgumentError(TokenDeployError):
    """Malformed CLI input or batch JSON."""
