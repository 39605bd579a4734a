"""
Runtime Configuration

Settings for trees built by applications and the CLI: shape, hash
function, zero value and logging.

Can be loaded from:
- Environment variables (IMT_* prefix, .env honoured)
- YAML file
- Programmatic construction
"""

from __future__ import annotations

import copy
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from dotenv import load_dotenv

from imt.crypto.hashing import from_hex, get_hash_function
from imt.merkle.incremental_tree import IncrementalMerkleTree
from imt.merkle.zeroes import HashFunction
from imt.schemas.errors import InvalidArgumentException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "IMT_"

# 32 zero bytes: the customary empty leaf for digest trees
DEFAULT_ZERO_VALUE = "0x" + "00" * 32


@dataclass
class TreeConfig:
    """
    Tree and logging configuration.

    zero_value is a 0x-prefixed hex string; hash names a function
    registered in imt.crypto.hashing.HASH_FUNCTIONS.
    """
    depth: int = 20
    arity: int = 2
    hash: str = "sha256"
    zero_value: str = DEFAULT_ZERO_VALUE
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - IMT_DEPTH: Tree depth
        - IMT_ARITY: Children per node
        - IMT_HASH: Registered hash function name
        - IMT_ZERO_VALUE: Zero leaf as 0x hex
        - IMT_LOG_LEVEL: Log level name
        - IMT_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}DEPTH"):
            overrides["depth"] = int(os.getenv(f"{ENV_PREFIX}DEPTH", "20"))
        if os.getenv(f"{ENV_PREFIX}ARITY"):
            overrides["arity"] = int(os.getenv(f"{ENV_PREFIX}ARITY", "2"))
        if os.getenv(f"{ENV_PREFIX}HASH"):
            overrides["hash"] = os.getenv(f"{ENV_PREFIX}HASH")
        if os.getenv(f"{ENV_PREFIX}ZERO_VALUE"):
            overrides["zero_value"] = os.getenv(f"{ENV_PREFIX}ZERO_VALUE")
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """
        Load configuration from a dictionary (supports partial data).

        Raises:
            InvalidArgumentException: If zero_value is not a string (an
                unquoted 0x00 in YAML is read as the integer 0)
        """
        defaults = cls()
        zero_value = data.get("zero_value", defaults.zero_value)
        if not isinstance(zero_value, str):
            raise InvalidArgumentException(
                f"zero_value must be a quoted 0x hex string, got {type(zero_value).__name__}",
                argument="zero_value",
            )
        return cls(
            depth=int(data.get("depth", defaults.depth)),
            arity=int(data.get("arity", defaults.arity)),
            hash=data.get("hash", defaults.hash),
            zero_value=zero_value,
            log_level=data.get("log_level", defaults.log_level),
            log_file=data.get("log_file", defaults.log_file),
        )

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def hash_function(self) -> HashFunction:
        """Resolve the configured hash function."""
        return get_hash_function(self.hash)

    def zero_node(self) -> bytes:
        """Decode the configured zero value."""
        try:
            return from_hex(self.zero_value)
        except ValueError as e:
            raise InvalidArgumentException(
                f"Invalid zero_value: {e}", argument="zero_value"
            ) from e

    def create_tree(self, leaves: Optional[Sequence[bytes]] = None) -> IncrementalMerkleTree:
        """Build a tree with this configuration and optional initial leaves."""
        return IncrementalMerkleTree(
            self.hash_function(),
            depth=self.depth,
            zero_value=self.zero_node(),
            arity=self.arity,
            leaves=leaves,
        )


def load_config(config_path: Optional[Path] = None) -> TreeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Without an explicit
    path, ./imt.yaml and ~/.config/imt/config.yaml are tried in order.
    """
    config = TreeConfig()

    if config_path is not None:
        config = TreeConfig.from_yaml(config_path)
    else:
        default_paths = [
            Path.cwd() / "imt.yaml",
            Path.home() / ".config" / "imt" / "config.yaml",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = TreeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return f"""# Incremental Merkle tree settings
depth: 20
arity: 2
hash: sha256                 # sha256 | sha256-length-prefixed | blake2b
zero_value: "{DEFAULT_ZERO_VALUE}"
log_level: INFO
log_file: null
"""
