# eosio_did_resolver/rpc.py
"""Fetching account permissions from a chain's API nodes."""

import logging
import os
from typing import Dict, Any, Callable, List, Optional, Tuple

import requests
from pydantic import ValidationError

from .constants import (
    DEFAULT_RPC_TIMEOUT,
    ENV_RPC_TIMEOUT,
    GET_ACCOUNT_PATH,
    LINKED_DOMAINS_SERVICE_TYPE,
)
from .errors import ChainRpcError, ConfigurationError
from .schemas import AccountPermission, EosioAccount, MethodId, Service

logger = logging.getLogger(__name__)

# (endpoint url, account name) -> raw get_account response
FetchAccount = Callable[[str, str], Dict[str, Any]]


def parse_timeout(value: Any, source: str) -> float:
    """Validates a timeout in seconds; ``source`` names where it came from in errors."""
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{source} must be a number of seconds, got '{value}'.")
    if timeout <= 0:
        raise ConfigurationError(f"{source} must be positive, got '{value}'.")
    return timeout


def get_rpc_timeout() -> float:
    """RPC timeout in seconds, from EOSIO_DID_RPC_TIMEOUT or the default."""
    value = os.getenv(ENV_RPC_TIMEOUT)
    if value is None or value == "":
        return DEFAULT_RPC_TIMEOUT
    return parse_timeout(value, ENV_RPC_TIMEOUT)


def fetch_chain_account(
    endpoint: str,
    account_name: str,
    timeout: Optional[float] = None
) -> Dict[str, Any]:
    """
    Calls ``/v1/chain/get_account`` on one API node.

    Args:
        endpoint: Base URL of the node, e.g. "https://eos.greymass.com".
        account_name: The EOSIO account to look up.
        timeout: Request timeout in seconds. Defaults to get_rpc_timeout().

    Returns:
        The decoded JSON response body.

    Raises:
        ChainRpcError: On transport errors, non-2xx status or a non-JSON body.
        ConfigurationError: If EOSIO_DID_RPC_TIMEOUT is invalid and no timeout is given.
    """
    url = endpoint.rstrip("/") + GET_ACCOUNT_PATH
    if timeout is None:
        timeout = get_rpc_timeout()

    try:
        response = requests.post(url, json={"account_name": account_name}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ChainRpcError(f"get_account for '{account_name}' failed at {url}: {e}", endpoint=endpoint)

    try:
        body = response.json()
    except ValueError as e:
        raise ChainRpcError(f"get_account response from {url} is not JSON: {e}", endpoint=endpoint)

    if not isinstance(body, dict):
        raise ChainRpcError(f"get_account response from {url} is not a JSON object", endpoint=endpoint)
    return body


def linked_domain_services(services: List[Service]) -> List[Service]:
    """Services that advertise a LinkedDomains endpoint, in listed order."""
    return [service for service in services if service.matches(LINKED_DOMAINS_SERVICE_TYPE)]


def _query_endpoint(
    service: Service,
    account_name: str,
    fetch: FetchAccount
) -> Tuple[Optional[EosioAccount], Optional[str]]:
    """Tries one endpoint. Returns (account, None) on success, (None, error) otherwise."""
    try:
        body = fetch(service.serviceEndpoint, account_name)
    except ChainRpcError as e:
        return None, e.message
    except ConfigurationError:
        raise
    except Exception as e:
        # custom fetch capabilities raise their own error types
        return None, f"fetch failed: {e}"

    try:
        account = EosioAccount.model_validate(body)
    except ValidationError as e:
        return None, f"malformed get_account response: {e}"

    if account.account_name != account_name:
        return None, f"response is for account '{account.account_name}'"
    return account, None


def fetch_account(
    method_id: MethodId,
    fetch: Optional[FetchAccount] = None
) -> Optional[List[AccountPermission]]:
    """
    Fetches the permissions of ``method_id.subject`` from the chain.

    LinkedDomains endpoints are tried one at a time in listed order; the
    first one that returns the account wins. Failing endpoints are logged
    and skipped.

    Args:
        method_id: The parsed chain and account.
        fetch: Fetch capability; defaults to fetch_chain_account.

    Returns:
        The account's permissions in chain order, or None if no endpoint
        returned the account.

    Raises:
        ConfigurationError: If the fetch capability reports a configuration problem.
    """
    if fetch is None:
        fetch = fetch_chain_account

    services = linked_domain_services(method_id.chain.service)
    if not services:
        logger.warning(f"Chain {method_id.chain.chainId} has no {LINKED_DOMAINS_SERVICE_TYPE} endpoints")
        return None

    for service in services:
        account, error = _query_endpoint(service, method_id.subject, fetch)
        if account is not None:
            logger.info(f"Fetched account '{method_id.subject}' from {service.serviceEndpoint}")
            return account.permissions
        logger.warning(f"Endpoint {service.serviceEndpoint} failed for '{method_id.subject}': {error}")

    logger.info(f"No endpoint returned account '{method_id.subject}' on chain {method_id.chain.chainId}")
    return None
