# eosio_did_resolver/keys.py
"""Conversion of EOSIO public key strings to JSON Web Keys."""

import logging
from typing import Tuple

import multibase
from Crypto.Hash import RIPEMD160
from cryptography.hazmat.primitives.asymmetric import ec
from jwcrypto.common import base64url_encode

from .constants import (
    LEGACY_KEY_PREFIX,
    KEY_CHECKSUM_SIZE,
    COMPRESSED_POINT_SIZE,
    KEY_TYPE_CURVES,
    CURVE_VERIFICATION_METHOD_TYPES,
)
from .errors import InvalidKeyError, UnsupportedKeyTypeError
from .schemas import Jwk

logger = logging.getLogger(__name__)

MULTIBASE_BASE58BTC_PREFIX: str = "z"

_EC_CURVES = {
    "secp256k1": ec.SECP256K1,
    "P-256": ec.SECP256R1,
}


def _ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def _checksum(data: bytes, suffix: bytes = b"") -> bytes:
    return _ripemd160(data + suffix)[:KEY_CHECKSUM_SIZE]


def _b58decode(value: str) -> bytes:
    # EOSIO keys use the bitcoin base58 alphabet, same as multibase base58btc
    return multibase.decode(MULTIBASE_BASE58BTC_PREFIX + value)


def _b58encode(data: bytes) -> str:
    return multibase.encode('base58btc', data).decode('ascii')[len(MULTIBASE_BASE58BTC_PREFIX):]


def _read_varuint32(data: bytes, offset: int) -> Tuple[int, int]:
    """Reads a LEB128 varuint32, returning (value, next offset)."""
    value = 0
    shift = 0
    while True:
        if offset >= len(data) or shift > 28:
            raise InvalidKeyError("Truncated varuint32 in WebAuthn public key.")
        byte = data[offset]
        offset += 1
        value |= (byte & 0x7f) << shift
        if not byte & 0x80:
            return value, offset
        shift += 7


def _check_key_data(key_type: str, data: bytes) -> None:
    if key_type in ("K1", "R1"):
        if len(data) != COMPRESSED_POINT_SIZE:
            raise InvalidKeyError(
                f"Public key has incorrect length: {len(data)} bytes (expected {COMPRESSED_POINT_SIZE})."
            )
        return

    # WA: compressed point, user presence flag, length-prefixed relying party id
    if len(data) < COMPRESSED_POINT_SIZE + 2:
        raise InvalidKeyError(f"WebAuthn public key too short: {len(data)} bytes.")
    rpid_length, offset = _read_varuint32(data, COMPRESSED_POINT_SIZE + 1)
    if offset + rpid_length != len(data):
        raise InvalidKeyError("WebAuthn public key relying party id length does not match key size.")


def decode_public_key(key: str) -> Tuple[str, bytes]:
    """
    Decodes an EOSIO public key string.

    Accepts ``PUB_K1_``, ``PUB_R1_`` and ``PUB_WA_`` keys as well as legacy
    ``EOS`` keys (which are always K1).

    Args:
        key: The public key string as it appears in chain data.

    Returns:
        A tuple of the key type ("K1", "R1" or "WA") and the key data bytes.

    Raises:
        UnsupportedKeyTypeError: If the key prefix or type is not recognized.
        InvalidKeyError: If decoding, the checksum or the size check fails.
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"Public key must be a string, got {type(key).__name__}.")

    if key.startswith("PUB_"):
        parts = key.split("_", 2)
        if len(parts) != 3 or not parts[2]:
            raise InvalidKeyError(f"Malformed public key: {key}")
        key_type, encoded = parts[1], parts[2]
        if key_type not in KEY_TYPE_CURVES:
            raise UnsupportedKeyTypeError(f"Key type '{key_type}' is not supported: {key}")
        suffix = key_type.encode('ascii')
    elif key.startswith(LEGACY_KEY_PREFIX):
        key_type, encoded, suffix = "K1", key[len(LEGACY_KEY_PREFIX):], b""
    else:
        raise UnsupportedKeyTypeError(f"Unrecognized public key format: {key}")

    try:
        raw = _b58decode(encoded)
    except Exception as e:
        raise InvalidKeyError(f"Failed to decode base58 public key '{key}': {e}")

    if len(raw) <= KEY_CHECKSUM_SIZE:
        raise InvalidKeyError(f"Public key is too short: {key}")

    data, checksum = raw[:-KEY_CHECKSUM_SIZE], raw[-KEY_CHECKSUM_SIZE:]
    if _checksum(data, suffix) != checksum:
        raise InvalidKeyError(f"Checksum mismatch for public key: {key}")

    _check_key_data(key_type, data)
    return key_type, data


def public_key_to_string(key_type: str, data: bytes) -> str:
    """Canonical ``PUB_<type>_`` string form of a public key."""
    if key_type not in KEY_TYPE_CURVES:
        raise UnsupportedKeyTypeError(f"Key type '{key_type}' is not supported.")
    return f"PUB_{key_type}_" + _b58encode(data + _checksum(data, key_type.encode('ascii')))


def int_to_base64url(value: int) -> str:
    """
    Base64url encoding of an integer's big-endian representation (RFC 7517 A.1).

    The byte string is the minimal-width encoding; it is not left-padded to
    the curve's coordinate size.
    """
    if value < 0:
        raise ValueError("Only non-negative integers can be encoded.")
    length = max(1, (value.bit_length() + 7) // 8)
    return base64url_encode(value.to_bytes(length, 'big'))


def encode_key(key: str) -> Jwk:
    """
    Converts an EOSIO public key string to a JWK.

    Args:
        key: e.g. "PUB_K1_7ueKyvQJpBLVjuNgLedAgJakw3bLyd4GBx1N4jXswpBhE5SbJK"

    Returns:
        The Jwk with the affine point coordinates and the canonical key string as ``kid``.

    Raises:
        UnsupportedKeyTypeError: If the key type has no JWK curve here.
        InvalidKeyError: If the key does not decode to a point on its curve.
    """
    key_type, data = decode_public_key(key)
    crv = KEY_TYPE_CURVES[key_type]

    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(
            _EC_CURVES[crv](), data[:COMPRESSED_POINT_SIZE]
        )
    except ValueError as e:
        raise InvalidKeyError(f"Public key is not a valid {crv} point: {key} ({e})")

    numbers = public_key.public_numbers()
    jwk = Jwk(
        crv=crv,
        kty="EC",
        x=int_to_base64url(numbers.x),
        y=int_to_base64url(numbers.y),
        kid=public_key_to_string(key_type, data),
    )
    logger.debug(f"Encoded {key_type} key {jwk.kid} as {crv} JWK")
    return jwk


def verification_method_type(jwk: Jwk) -> str:
    """Verification method type for a JWK produced by ``encode_key``."""
    try:
        return CURVE_VERIFICATION_METHOD_TYPES[jwk.crv]
    except KeyError:
        raise UnsupportedKeyTypeError(f"No verification method type for curve '{jwk.crv}'.")
