# eosio_did_resolver/constants.py
"""Shared constants for the eosio-did-resolver."""

DID_METHOD: str = "eosio"
DID_PREFIX: str = "did:eosio:"

DID_CORE_CONTEXT: str = "https://www.w3.org/ns/did/v1"
VERIFIABLE_CONDITIONS_CONTEXT: str = (
    "https://w3c-ccg.github.io/verifiable-conditions/contexts/verifiable-conditions-2021-v1.json"
)
DID_DOCUMENT_CONTEXTS = [DID_CORE_CONTEXT, VERIFIABLE_CONDITIONS_CONTEXT]

DID_LD_JSON_CONTENT_TYPE: str = "application/did+ld+json"

ERROR_INVALID_DID: str = "invalidDid"
ERROR_NOT_FOUND: str = "notFound"
ERROR_INVALID_KEY: str = "invalidKey"
ERROR_METHOD_NOT_SUPPORTED: str = "methodNotSupported"

VERIFIABLE_CONDITION_TYPE: str = "VerifiableCondition"
LINKED_DOMAINS_SERVICE_TYPE: str = "LinkedDomains"

# EOSIO account names: up to 13 chars of [a-z1-5.], never ending in '.'
ACCOUNT_NAME_PATTERN: str = r"[a-z1-5.]{0,12}[a-z1-5]"
CHAIN_ID_PATTERN: str = r"[A-Fa-f0-9]{64}"

GET_ACCOUNT_PATH: str = "/v1/chain/get_account"
DEFAULT_RPC_TIMEOUT: float = 10.0

ENV_CHAIN_REGISTRY: str = "EOSIO_DID_CHAIN_REGISTRY"
ENV_RPC_TIMEOUT: str = "EOSIO_DID_RPC_TIMEOUT"

LEGACY_KEY_PREFIX: str = "EOS"
KEY_CHECKSUM_SIZE: int = 4
COMPRESSED_POINT_SIZE: int = 33

KEY_TYPE_CURVES = {
    "K1": "secp256k1",
    "R1": "P-256",
    "WA": "P-256",
}
CURVE_VERIFICATION_METHOD_TYPES = {
    "secp256k1": "EcdsaSecp256k1VerificationKey2019",
    "P-256": "JsonWebKey2020",
}

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
