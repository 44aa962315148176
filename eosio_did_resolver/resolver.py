# eosio_did_resolver/resolver.py
"""Resolution of did:eosio DIDs to DID resolution results."""

import logging
from functools import partial
from typing import Dict, Any, Callable, Optional

from .chain_registry import build_registry
from .constants import (
    DID_METHOD,
    DID_LD_JSON_CONTENT_TYPE,
    ERROR_INVALID_DID,
    ERROR_INVALID_KEY,
    ERROR_METHOD_NOT_SUPPORTED,
    ERROR_NOT_FOUND,
)
from .document import build_did_document
from .errors import InvalidKeyError
from .method_id import parse_did, parse_method_id
from .rpc import fetch_account, fetch_chain_account, get_rpc_timeout, parse_timeout
from .schemas import DIDResolutionResult, ParsedDID

logger = logging.getLogger(__name__)


def get_resolution_error(error: str) -> Dict[str, Any]:
    """Resolution result carrying only an error."""
    return DIDResolutionResult(didResolutionMetadata={"error": error}).to_json_dict()


def _fetch_from_options(options: Dict[str, Any]):
    fetch = options.get("fetch")
    if fetch is not None:
        return fetch
    timeout = options.get("timeout")
    if timeout is None:
        timeout = get_rpc_timeout()
    else:
        timeout = parse_timeout(timeout, "timeout option")
    return partial(fetch_chain_account, timeout=timeout)


def resolve(
    did: str,
    parsed: Optional[ParsedDID] = None,
    options: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Resolves a did:eosio DID.

    Args:
        did: The DID, e.g. "did:eosio:eos:eoscanadacom".
        parsed: The DID already split by a host resolver. Parsed from ``did`` if omitted.
        options: Resolution options. Recognized keys:
            ``eosio_chain_registry``: registry entries merged over the defaults.
            ``fetch``: callable ``(endpoint, account_name) -> dict`` used for get_account.
            ``timeout``: request timeout in seconds for the default fetch.

    Returns:
        The DID resolution result as a dict. On failure ``didDocument`` is None
        and ``didResolutionMetadata.error`` is one of invalidDid, notFound,
        invalidKey or methodNotSupported.

    Raises:
        ConfigurationError: If the registry override or registry file is malformed,
            or the timeout option or EOSIO_DID_RPC_TIMEOUT is not a positive number.
    """
    options = options or {}
    logger.info(f"Resolving {did}")

    if parsed is None:
        parsed = parse_did(did)
    if parsed is None:
        logger.info(f"Not a valid DID: {did}")
        return get_resolution_error(ERROR_INVALID_DID)
    if parsed.method != DID_METHOD:
        logger.info(f"DID method '{parsed.method}' is not supported by this resolver")
        return get_resolution_error(ERROR_METHOD_NOT_SUPPORTED)

    registry = build_registry(options.get("eosio_chain_registry"))

    method_id = parse_method_id(parsed.id, registry)
    if method_id is None:
        # invalid method-specific id, or no matching chain in the registry
        logger.info(f"Invalid did:eosio identifier: {parsed.id}")
        return get_resolution_error(ERROR_INVALID_DID)

    permissions = fetch_account(method_id, _fetch_from_options(options))
    if permissions is None:
        return get_resolution_error(ERROR_NOT_FOUND)

    try:
        document = build_did_document(method_id, parsed.did, permissions)
    except InvalidKeyError as e:
        logger.error(f"Account '{method_id.subject}' holds a key that cannot be encoded: {e}")
        return get_resolution_error(ERROR_INVALID_KEY)

    logger.info(f"Resolved {parsed.did} with {len(document.verificationMethod)} permissions")
    return DIDResolutionResult(
        didResolutionMetadata={"contentType": DID_LD_JSON_CONTENT_TYPE},
        didDocument=document,
        didDocumentMetadata={},
    ).to_json_dict()


def get_resolver() -> Dict[str, Callable[..., Dict[str, Any]]]:
    """Method name to resolver mapping, for registration with a multi-method host."""
    return {DID_METHOD: resolve}
