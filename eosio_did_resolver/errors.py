# eosio_did_resolver/errors.py
"""Custom exception classes for eosio-did-resolver."""

from .constants import ERROR_INVALID_DID, ERROR_NOT_FOUND, ERROR_INVALID_KEY


class EosioDidError(Exception):
    """Base class for resolver errors."""
    def __init__(self, message: str, error_code: str = "ResolverError"):
        self.message = message
        self.error_code = error_code
        super().__init__(f"[{error_code}] {message}")

class ConfigurationError(EosioDidError):
    """Error related to the chain registry or environment setup."""
    def __init__(self, message: str):
        super().__init__(message, error_code="ConfigurationError")

class InvalidDidError(EosioDidError):
    """The DID does not name a known chain and a valid account."""
    def __init__(self, message: str):
        super().__init__(message, error_code=ERROR_INVALID_DID)

class NotFoundError(EosioDidError):
    """No service endpoint returned the account."""
    def __init__(self, message: str):
        super().__init__(message, error_code=ERROR_NOT_FOUND)

class ChainRpcError(EosioDidError):
    """A single chain RPC call failed."""
    def __init__(self, message: str, endpoint: str = ""):
        super().__init__(message, error_code="ChainRpcError")
        self.endpoint = endpoint

class InvalidKeyError(EosioDidError):
    """A public key failed to decode or its checksum did not match."""
    def __init__(self, message: str):
        super().__init__(message, error_code=ERROR_INVALID_KEY)

class UnsupportedKeyTypeError(InvalidKeyError):
    """A public key uses a curve type that cannot be expressed as a JWK here."""
    def __init__(self, message: str):
        super().__init__(message)
        self.error_code = "UnsupportedKeyType"
