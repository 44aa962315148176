# eosio_did_resolver/method_id.py
"""Parsing of DID URLs and did:eosio method-specific identifiers."""

import re
import logging
from typing import Optional

from .constants import ACCOUNT_NAME_PATTERN, CHAIN_ID_PATTERN
from .chain_registry import Registry, find_chain_by_id
from .schemas import MethodId, ParsedDID

logger = logging.getLogger(__name__)

_ID_CHAR = r"(?:[a-zA-Z0-9._-]|%[0-9a-fA-F]{2})"
DID_URL_REGEX = re.compile(
    rf"^did:(?P<method>[a-z0-9]+):(?P<id>(?:{_ID_CHAR}*:)*{_ID_CHAR}+)"
    r"(?P<path>/[^#?]*)?(?:\?(?P<query>[^#]*))?(?:#(?P<fragment>.*))?$"
)

CHAIN_NAME_REGEX = re.compile(
    rf"^(?P<chain>{ACCOUNT_NAME_PATTERN}(?::{ACCOUNT_NAME_PATTERN})*):(?P<subject>{ACCOUNT_NAME_PATTERN})$"
)
CHAIN_ID_REGEX = re.compile(
    rf"^(?P<chain_id>{CHAIN_ID_PATTERN}):(?P<subject>{ACCOUNT_NAME_PATTERN})$"
)


def parse_did(did_url: str) -> Optional[ParsedDID]:
    """
    Splits a DID URL into method, method-specific id, path, query and fragment.

    Args:
        did_url: e.g. "did:eosio:eos:eoscanadacom#active"

    Returns:
        The ParsedDID, or None if the string is not a DID URL.
    """
    if not isinstance(did_url, str):
        return None
    match = DID_URL_REGEX.match(did_url.strip())
    if not match:
        return None
    method = match.group("method")
    method_id = match.group("id")
    return ParsedDID(
        did=f"did:{method}:{method_id}",
        method=method,
        id=method_id,
        didUrl=did_url.strip(),
        path=match.group("path"),
        query=match.group("query"),
        fragment=match.group("fragment"),
    )


def _find_chain_by_name(method_specific_id: str, registry: Registry) -> Optional[MethodId]:
    match = CHAIN_NAME_REGEX.match(method_specific_id)
    if not match:
        return None
    # aliases are registry keys in their own right, looked up verbatim
    entry = registry.get(match.group("chain"))
    if entry is None:
        logger.debug(f"No registry entry for chain name '{match.group('chain')}'")
        return None
    return MethodId(chain=entry, subject=match.group("subject"))


def _find_chain_by_id(method_specific_id: str, registry: Registry) -> Optional[MethodId]:
    match = CHAIN_ID_REGEX.match(method_specific_id)
    if not match:
        return None
    entry = find_chain_by_id(registry, match.group("chain_id"))
    if entry is None:
        logger.debug(f"No registry entry for chain id {match.group('chain_id')}")
        return None
    return MethodId(chain=entry, subject=match.group("subject"))


def parse_method_id(method_specific_id: str, registry: Registry) -> Optional[MethodId]:
    """
    Resolves a did:eosio method-specific id to a registry chain and account.

    The chain-name form (``eos:testnet:jungle:lioninjungle``) is tried first,
    then the chain-id form (``<64 hex chars>:caleosblocks``).

    Returns:
        The MethodId, or None if neither form matches a registry chain.
    """
    method_id = _find_chain_by_name(method_specific_id, registry)
    if method_id is None:
        method_id = _find_chain_by_id(method_specific_id, registry)
    if method_id is None:
        logger.debug(f"Method-specific id '{method_specific_id}' did not match any registry chain")
    return method_id
