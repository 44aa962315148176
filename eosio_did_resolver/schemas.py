# eosio_did_resolver/schemas.py
"""Pydantic models for chain data, registry entries and DID documents."""

from typing import Dict, Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from .constants import DID_DOCUMENT_CONTEXTS, VERIFIABLE_CONDITION_TYPE


class Service(BaseModel):
    """A DID Document service entry; also the registry's endpoint record."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: Union[str, List[str]]
    serviceEndpoint: str

    def matches(self, service_type: str) -> bool:
        if isinstance(self.type, list):
            return service_type in self.type
        return self.type == service_type

class ChainEntry(BaseModel):
    """Registry record for one EOSIO chain."""
    model_config = ConfigDict(frozen=True)

    chainId: str = Field(..., pattern=r"^[A-Fa-f0-9]{64}$")
    service: List[Service] = Field(default_factory=list)

class MethodId(BaseModel):
    """A method-specific id resolved against the registry."""
    model_config = ConfigDict(frozen=True)

    chain: ChainEntry
    subject: str

class ParsedDID(BaseModel):
    """The components of a DID URL."""
    did: str
    method: str
    id: str
    didUrl: str
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None


# Chain data, as returned by get_account. Unknown fields are ignored.

class KeyWeight(BaseModel):
    key: str
    weight: int

class PermissionLevel(BaseModel):
    actor: str
    permission: str

class PermissionLevelWeight(BaseModel):
    permission: PermissionLevel
    weight: int

class WaitWeight(BaseModel):
    wait_sec: int
    weight: int

class Authority(BaseModel):
    threshold: int = Field(..., ge=0)
    keys: List[KeyWeight] = Field(default_factory=list)
    accounts: List[PermissionLevelWeight] = Field(default_factory=list)
    waits: List[WaitWeight] = Field(default_factory=list)

class AccountPermission(BaseModel):
    """One authorization level of an account (owner, active, or custom)."""
    perm_name: str
    parent: str = ""
    required_auth: Authority

class EosioAccount(BaseModel):
    """Subset of the get_account response used to build a DID document."""
    account_name: str
    permissions: List[AccountPermission] = Field(..., min_length=1)


# DID document side.

class Jwk(BaseModel):
    """An elliptic-curve public key in JWK format."""
    crv: str
    kty: str = "EC"
    x: str
    y: str
    kid: str

class KeyCondition(BaseModel):
    """Leaf condition satisfied by a signature from one key."""
    id: str
    controller: str
    type: str
    publicKeyJwk: Jwk

class DelegatedCondition(BaseModel):
    """Leaf condition satisfied by another account's permission."""
    id: str
    controller: str
    type: str = VERIFIABLE_CONDITION_TYPE
    conditionDelegated: str

class WeightedCondition(BaseModel):
    condition: Union["ThresholdCondition", KeyCondition, DelegatedCondition]
    weight: int

class ThresholdCondition(BaseModel):
    """Weighted-threshold condition built from one account permission."""
    id: str
    controller: str
    type: str = VERIFIABLE_CONDITION_TYPE
    threshold: int
    conditionWeightedThreshold: List[WeightedCondition] = Field(default_factory=list)
    relationshipParent: Optional[List[str]] = None

WeightedCondition.model_rebuild()
ThresholdCondition.model_rebuild()

class DIDDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    context: List[str] = Field(default_factory=lambda: list(DID_DOCUMENT_CONTEXTS), alias="@context")
    id: str
    verificationMethod: List[ThresholdCondition] = Field(default_factory=list)
    service: List[Service] = Field(default_factory=list)

    def to_json_dict(self) -> Dict[str, Any]:
        """Lowers every condition variant to its DID document JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)

class DIDResolutionResult(BaseModel):
    """Standard DID resolution result."""
    didResolutionMetadata: Dict[str, Any] = Field(default_factory=dict)
    didDocument: Optional[DIDDocument] = None
    didDocumentMetadata: Dict[str, Any] = Field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "didResolutionMetadata": dict(self.didResolutionMetadata),
            "didDocument": self.didDocument.to_json_dict() if self.didDocument else None,
            "didDocumentMetadata": dict(self.didDocumentMetadata),
        }
