from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("orderfeed.config.yaml")
DEFAULT_SOURCES_PATH = Path("config/sources.yaml")

DEFAULT_CHAIN_ID = 1
DEFAULT_DATABASE_URL = "sqlite:///orderfeed.db"
VALID_SIDES = ("sell", "buy")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the engine configuration with defaults applied.

    Args:
        path: Optional path to the config file. Defaults to orderfeed.config.yaml

    Returns:
        Dict with chain_id, storage.database_url, asks.side and sources_path

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    chain_id = config.get("chain_id", DEFAULT_CHAIN_ID)
    if not isinstance(chain_id, int):
        raise ValueError("Config 'chain_id' must be an integer")
    config["chain_id"] = chain_id

    storage = config.setdefault("storage", {})
    storage.setdefault("database_url", DEFAULT_DATABASE_URL)

    asks = config.setdefault("asks", {})
    side = asks.setdefault("side", "sell")
    if side not in VALID_SIDES:
        raise ValueError(f"Config 'asks.side' must be one of {VALID_SIDES}, got {side!r}")

    config.setdefault("sources_path", str(DEFAULT_SOURCES_PATH))
    return config


def load_sources_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the attribution sources from YAML file.

    Args:
        path: Optional path to sources.yaml file. Defaults to config/sources.yaml

    Returns:
        Dictionary with sources configuration

    Raises:
        FileNotFoundError: If sources config file doesn't exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_SOURCES_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Sources config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError("Sources config must be a dictionary")
    if "version" not in config:
        raise ValueError("Sources config must have 'version' field")

    sources = config.setdefault("sources", [])
    if not isinstance(sources, list):
        raise ValueError("Sources config 'sources' must be a list")
    for source in sources:
        if not isinstance(source, dict):
            raise ValueError("Each source must be a dictionary")
        for field in ["id", "address", "name"]:
            if field not in source:
                raise ValueError(f"Source missing required field: {field}")
        if not isinstance(source["id"], int):
            raise ValueError(f"Source id must be an integer, got {source['id']!r}")
        metadata = source.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise ValueError(f"Source {source['id']} 'metadata' must be a dictionary")

    return config
