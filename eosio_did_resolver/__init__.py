"""did:eosio DID resolver."""

from .resolver import resolve, get_resolver

__all__ = ["resolve", "get_resolver"]
