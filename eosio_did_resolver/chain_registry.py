# eosio_did_resolver/chain_registry.py

"""
Registry of known EOSIO chains.

The built-in table maps chain names (and aliases such as ``eos:testnet:jungle``)
to the chain id and the public API nodes that can answer ``get_account``.
Callers extend or override it per resolution, either with a JSON file named
by the ``EOSIO_DID_CHAIN_REGISTRY`` environment variable or with a mapping
passed in the resolution options. Nothing here is cached: every resolution
builds its own registry from these immutable inputs.
"""

import json
import logging
import os
from collections import Counter
from typing import Dict, Any, List, Mapping, Optional

from pydantic import ValidationError

from .constants import ENV_CHAIN_REGISTRY, LINKED_DOMAINS_SERVICE_TYPE
from .errors import ConfigurationError
from .schemas import ChainEntry

logger = logging.getLogger(__name__)

Registry = Dict[str, ChainEntry]


def _linked_domain(url: str) -> Dict[str, str]:
    return {"id": url, "type": LINKED_DOMAINS_SERVICE_TYPE, "serviceEndpoint": url}


DEFAULT_CHAIN_REGISTRY: Dict[str, Dict[str, Any]] = {
    "eos": {
        "chainId": "aca376f206b8fc25a6ed44dbdc66547c36c6c33e3a119ffbeaef943642f0e906",
        "service": [
            _linked_domain("https://eos.greymass.com"),
            _linked_domain("https://eos.dfuse.eosnation.io"),
        ],
    },
    "eos:testnet:jungle": {
        "chainId": "2a02a0053e5a8cf73a56ba0fda11e4d92e0238a4a2aa74fccf46d5a910746840",
        "service": [
            _linked_domain("https://jungle3.cryptolions.io"),
        ],
    },
    "telos": {
        "chainId": "4667b205c6838ef70ff7988f6e8257e8be0e1284a2f59699054a018f743b1d11",
        "service": [
            _linked_domain("https://telos.greymass.com"),
        ],
    },
    "telos:testnet": {
        "chainId": "1eaa0824707c8c16bd25145493bf062aecddfeb56c736f6ba6397f3195f33c9f",
        "service": [
            _linked_domain("https://testnet.telos.net"),
        ],
    },
    "wax": {
        "chainId": "1064487b3cd1a897ce03ae5b6a865651747e2e152090f99c1d19d44e01aea5a4",
        "service": [
            _linked_domain("https://wax.greymass.com"),
        ],
    },
    "wax:testnet": {
        "chainId": "f16b1833c747c43682f4386fca9cbb327929334a762755ebec17f6f23c9b8a12",
        "service": [
            _linked_domain("https://testnet.waxsweden.org"),
        ],
    },
    "proton": {
        "chainId": "384da888112027f0321850a169f737c33e53b388aad48b5adace4bab97f437e0",
        "service": [
            _linked_domain("https://proton.greymass.com"),
        ],
    },
    "fio": {
        "chainId": "21dcae42c0182200e93f954a074011f9048a7624c6fe81d3c9541a614a88bd1c",
        "service": [
            _linked_domain("https://fio.greymass.com"),
        ],
    },
}


def parse_registry(data: Mapping[str, Any]) -> Registry:
    """
    Validates a mapping in the registry file format.

    Args:
        data: ``{chain_name: {"chainId": ..., "service": [...]}}``

    Returns:
        A new registry with one ChainEntry per key, in input order.

    Raises:
        ConfigurationError: If the mapping or any entry is malformed.
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Chain registry must be a JSON object, got {type(data).__name__}.")

    registry: Registry = {}
    for name, entry in data.items():
        if isinstance(entry, ChainEntry):
            registry[name] = entry
            continue
        try:
            registry[name] = ChainEntry.model_validate(entry)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid chain registry entry '{name}': {e}")
    return registry


def load_default_registry() -> Registry:
    """Returns a fresh copy of the built-in chain registry."""
    return parse_registry(DEFAULT_CHAIN_REGISTRY)


def load_registry_file(path: str) -> Registry:
    """Loads and validates a chain registry JSON file."""
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load chain registry from {path}: {e}")
    logger.debug(f"Loaded {len(data) if isinstance(data, dict) else 0} chain entries from {path}")
    return parse_registry(data)


def merge_registries(default: Registry, override: Optional[Registry]) -> Registry:
    """
    Shallow merge of two registries.

    Entries in ``override`` replace entries in ``default`` with the same key.
    Keys keep their position from ``default``; new keys are appended in the
    order they appear in ``override``. Neither input is modified.
    """
    merged = dict(default)
    if override:
        merged.update(override)
    return merged


def duplicate_chain_ids(registry: Registry) -> List[str]:
    """Chain ids that more than one registry key points at."""
    counts = Counter(entry.chainId for entry in registry.values())
    return [chain_id for chain_id, count in counts.items() if count > 1]


def find_chain_by_id(registry: Registry, chain_id: str) -> Optional[ChainEntry]:
    """First entry, in registry insertion order, whose chain id equals ``chain_id``."""
    for entry in registry.values():
        if entry.chainId == chain_id:
            return entry
    return None


def build_registry(override: Optional[Mapping[str, Any]] = None) -> Registry:
    """
    Builds the registry used for one resolution.

    Layers, lowest precedence first: the built-in table, the file named by
    ``EOSIO_DID_CHAIN_REGISTRY`` (if set), then ``override``.

    Raises:
        ConfigurationError: If the file or the override is malformed.
    """
    registry = load_default_registry()

    registry_path = os.getenv(ENV_CHAIN_REGISTRY)
    if registry_path:
        logger.debug(f"Merging chain registry file from {ENV_CHAIN_REGISTRY}: {registry_path}")
        registry = merge_registries(registry, load_registry_file(registry_path))

    if override:
        registry = merge_registries(registry, parse_registry(override))

    for chain_id in duplicate_chain_ids(registry):
        names = [name for name, entry in registry.items() if entry.chainId == chain_id]
        logger.warning(
            f"Chain id {chain_id} is registered under several names {names}; "
            f"chain-id DIDs resolve to '{names[0]}'"
        )

    return registry
