"""
Account identities and key management utilities
"""

import hashlib
from typing import Tuple, Union

from ecdsa import BadSignatureError, MalformedPointError, SECP256k1, SigningKey, VerifyingKey

IDENTITY_SIZE = 20
ZERO_IDENTITY = "0x" + "00" * IDENTITY_SIZE


def normalize_identity(value: Union[str, bytes]) -> str:
    """Return identity as lowercase 0x-prefixed hex, validating its length"""
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        text = value[2:] if value[:2].lower() == "0x" else value
        try:
            raw = bytes.fromhex(text)
        except ValueError:
            raise ValueError(f"Identity is not valid hex: {value!r}")
    else:
        raise ValueError(f"Unsupported identity type: {type(value).__name__}")

    if len(raw) != IDENTITY_SIZE:
        raise ValueError(f"Identity must be {IDENTITY_SIZE} bytes, got {len(raw)}")

    return "0x" + raw.hex()


def is_zero_identity(value: Union[str, bytes]) -> bool:
    return normalize_identity(value) == ZERO_IDENTITY


def identity_bytes(value: Union[str, bytes]) -> bytes:
    return bytes.fromhex(normalize_identity(value)[2:])


def address_from_public_key(pubkey_hex: str) -> str:
    """Derive the account identity owned by a raw secp256k1 public key"""
    pubkey_bytes = bytes.fromhex(pubkey_hex)
    if len(pubkey_bytes) != 64:
        raise ValueError(f"Public key must be 64 raw bytes, got {len(pubkey_bytes)}")

    # Last 20 bytes of the key digest form the account identity
    digest = hashlib.sha3_256(pubkey_bytes).digest()
    return "0x" + digest[-IDENTITY_SIZE:].hex()


def verify_signature(message: bytes, signature_hex: str, pubkey_hex: str) -> bool:
    """Verify signature against message and raw public key"""
    try:
        vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
        return vk.verify(bytes.fromhex(signature_hex), message, hashfunc=hashlib.sha256)
    except (BadSignatureError, MalformedPointError, ValueError):
        return False


class AccountKey:
    """secp256k1 key controlling one ledger account"""

    def __init__(self, private_key: bytes = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @classmethod
    def from_hex(cls, private_hex: str) -> 'AccountKey':
        return cls(bytes.fromhex(private_hex))

    def get_public_key_hex(self) -> str:
        """Raw 64-byte public key (x || y) in hex"""
        return self.public_key.to_string().hex()

    def get_private_key_hex(self) -> str:
        return self.private_key.to_string().hex()

    @property
    def address(self) -> str:
        return address_from_public_key(self.get_public_key_hex())

    def sign_message(self, message: bytes) -> str:
        """Sign message and return signature in hex"""
        signature = self.private_key.sign(message, hashfunc=hashlib.sha256)
        return signature.hex()

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, public_key_hex)"""
        key = AccountKey()
        return key.get_private_key_hex(), key.get_public_key_hex()
