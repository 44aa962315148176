# eosio_did_resolver/document.py

"""
Builds did:eosio DID Documents from account permissions.

Every permission of the account becomes one weighted-threshold Verifiable
Condition. Its keys become key conditions carrying a JWK, and its delegated
account authorities become delegated conditions pointing at the other
account's permission. The transform is purely structural: thresholds,
weights and permission order are copied from the chain data as-is, and
parent references are not checked against the other permissions.
"""

import logging
from typing import List

from .constants import DID_DOCUMENT_CONTEXTS
from .keys import encode_key, verification_method_type
from .schemas import (
    AccountPermission,
    DelegatedCondition,
    DIDDocument,
    KeyCondition,
    MethodId,
    PermissionLevelWeight,
    ThresholdCondition,
    WeightedCondition,
)

logger = logging.getLogger(__name__)


def delegated_chain_reference(did: str, subject: str) -> str:
    """
    The DID with its trailing ``:<subject>`` removed, e.g. "did:eosio:eos".

    Delegated targets are built as ``<this>:<actor>#<permission>``. The
    off-by-one slice of the reference resolver, which yields
    "id:eosio:eos::eoscanadaaaa#active", is not reproduced.
    """
    suffix = ":" + subject
    if did.endswith(suffix):
        return did[:-len(suffix)]
    return did.rsplit(":", 1)[0]


def create_key_condition(base_id: str, index: int, did: str, key: str) -> KeyCondition:
    """
    Key condition for one weighted key.

    Raises:
        InvalidKeyError: If the key cannot be decoded.
        UnsupportedKeyTypeError: If the key type has no JWK representation.
    """
    jwk = encode_key(key)
    return KeyCondition(
        id=f"{base_id}-{index}",
        controller=did,
        type=verification_method_type(jwk),
        publicKeyJwk=jwk,
    )


def create_delegated_condition(
    base_id: str,
    index: int,
    did: str,
    chain_reference: str,
    account: PermissionLevelWeight
) -> DelegatedCondition:
    return DelegatedCondition(
        id=f"{base_id}-{index}",
        controller=did,
        conditionDelegated=f"{chain_reference}:{account.permission.actor}#{account.permission.permission}",
    )


def create_permission_condition(
    method_id: MethodId,
    did: str,
    permission: AccountPermission
) -> ThresholdCondition:
    """Threshold condition for one permission; keys first, then accounts."""
    base_id = f"{did}#{permission.perm_name}"
    chain_reference = delegated_chain_reference(did, method_id.subject)
    authority = permission.required_auth

    weighted: List[WeightedCondition] = []
    index = 0
    for key in authority.keys:
        weighted.append(WeightedCondition(
            condition=create_key_condition(base_id, index, did, key.key),
            weight=key.weight,
        ))
        index += 1

    for account in authority.accounts:
        weighted.append(WeightedCondition(
            condition=create_delegated_condition(base_id, index, did, chain_reference, account),
            weight=account.weight,
        ))
        index += 1

    return ThresholdCondition(
        id=base_id,
        controller=did,
        threshold=authority.threshold,
        conditionWeightedThreshold=weighted,
        relationshipParent=[f"{did}#{permission.parent}"] if permission.parent else None,
    )


def build_did_document(
    method_id: MethodId,
    did: str,
    permissions: List[AccountPermission]
) -> DIDDocument:
    """
    Builds the DID Document for an account.

    Args:
        method_id: The parsed chain and account.
        did: The DID being resolved, without path, query or fragment.
        permissions: The account's permissions, in chain order.

    Returns:
        The DIDDocument, one verification method per permission.

    Raises:
        InvalidKeyError: If any key in the chain data cannot be encoded.
    """
    verification_methods = [
        create_permission_condition(method_id, did, permission)
        for permission in permissions
    ]
    logger.debug(f"Built {len(verification_methods)} verification methods for {did}")

    return DIDDocument(
        context=list(DID_DOCUMENT_CONTEXTS),
        id=did,
        verificationMethod=verification_methods,
        service=list(method_id.chain.service),
    )
