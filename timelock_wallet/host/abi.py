"""
Binary call-data codec for the timelock wallet entry points.

Selectors, error tags and event topics are derived from canonical
signatures with SHA3-256. Every argument and return value occupies one
32-byte big-endian word; addresses are left-padded with zeros.
"""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..events import EVENT_TYPES
from ..errors import AbiError, ErrorKind, UnknownMethod
from ..identity import IDENTITY_SIZE, identity_bytes
from ..wallet import UINT256_MAX

WORD_SIZE = 32
SELECTOR_SIZE = 4


def signature_digest(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def selector(signature: str) -> bytes:
    """First four bytes of the signature digest"""
    return signature_digest(signature.encode())[:SELECTOR_SIZE]


def event_topic(signature: str) -> bytes:
    return signature_digest(signature.encode())


@dataclass(frozen=True)
class MethodSpec:
    """Entry point description used for dispatch and encoding"""
    name: str
    arg_types: Tuple[str, ...]
    returns: Tuple[str, ...] = ()
    payable: bool = False
    read_only: bool = False

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.arg_types)})"

    @property
    def selector(self) -> bytes:
        return selector(self.signature)


METHODS: Dict[str, MethodSpec] = {
    spec.name: spec for spec in (
        MethodSpec("init", ("uint256",)),
        MethodSpec("deposit", (), payable=True),
        MethodSpec("withdraw", ("address",)),
        MethodSpec("extend_lock", ("uint256",)),
        MethodSpec("owner", (), returns=("address",), read_only=True),
        MethodSpec("unlock_time", (), returns=("uint256",), read_only=True),
    )
}

METHODS_BY_SELECTOR: Dict[bytes, MethodSpec] = {spec.selector: spec for spec in METHODS.values()}

ERRORS_BY_SELECTOR: Dict[bytes, ErrorKind] = {selector(kind.signature): kind for kind in ErrorKind}


def get_method(name: str) -> MethodSpec:
    if not isinstance(name, str):
        raise UnknownMethod(f"Method name must be a string, got {type(name).__name__}")
    try:
        return METHODS[name]
    except KeyError:
        raise UnknownMethod(f"Unknown method: {name}")


def encode_uint256(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AbiError(f"uint256 expects int, got {type(value).__name__}")
    if not (0 <= value <= UINT256_MAX):
        raise AbiError(f"Value out of uint256 range: {value}")
    return value.to_bytes(WORD_SIZE, 'big')


def decode_uint256(word: bytes) -> int:
    if len(word) != WORD_SIZE:
        raise AbiError(f"uint256 word must be {WORD_SIZE} bytes, got {len(word)}")
    return int.from_bytes(word, 'big')


def encode_address(identity: str) -> bytes:
    try:
        raw = identity_bytes(identity)
    except ValueError as e:
        raise AbiError(str(e))
    return raw.rjust(WORD_SIZE, b'\x00')


def decode_address(word: bytes) -> str:
    if len(word) != WORD_SIZE:
        raise AbiError(f"address word must be {WORD_SIZE} bytes, got {len(word)}")

    padding = word[:WORD_SIZE - IDENTITY_SIZE]
    if any(padding):
        raise AbiError("Address word has non-zero padding")

    return "0x" + word[WORD_SIZE - IDENTITY_SIZE:].hex()


_ENCODERS = {'uint256': encode_uint256, 'address': encode_address}
_DECODERS = {'uint256': decode_uint256, 'address': decode_address}


def encode_values(types: Tuple[str, ...], values: Tuple[Any, ...]) -> bytes:
    if len(types) != len(values):
        raise AbiError(f"Expected {len(types)} values, got {len(values)}")
    return b"".join(_ENCODERS[t](v) for t, v in zip(types, values))


def decode_values(types: Tuple[str, ...], data: bytes) -> Tuple[Any, ...]:
    if len(data) != WORD_SIZE * len(types):
        raise AbiError(f"Expected {WORD_SIZE * len(types)} bytes of arguments, got {len(data)}")

    values = []
    for i, t in enumerate(types):
        word = data[i * WORD_SIZE:(i + 1) * WORD_SIZE]
        values.append(_DECODERS[t](word))
    return tuple(values)


def encode_call(name: str, *args) -> bytes:
    """Build call data for a named entry point"""
    spec = get_method(name)
    return spec.selector + encode_values(spec.arg_types, args)


def decode_call(data: bytes) -> Tuple[MethodSpec, Tuple[Any, ...]]:
    """Split call data into its method spec and decoded arguments"""
    if len(data) < SELECTOR_SIZE:
        raise AbiError("Call data shorter than a selector")

    spec = METHODS_BY_SELECTOR.get(data[:SELECTOR_SIZE])
    if spec is None:
        raise UnknownMethod(f"Unknown selector: 0x{data[:SELECTOR_SIZE].hex()}")

    return spec, decode_values(spec.arg_types, data[SELECTOR_SIZE:])


def encode_return(spec: MethodSpec, value: Any) -> bytes:
    if not spec.returns:
        return b""
    return encode_values(spec.returns, (value,))


def decode_return(spec: MethodSpec, data: bytes) -> Any:
    if not spec.returns:
        if data:
            raise AbiError(f"{spec.name} returns nothing, got {len(data)} bytes")
        return None
    return decode_values(spec.returns, data)[0]


def encode_error(kind: ErrorKind) -> bytes:
    """Errors carry an empty payload: only the selector"""
    return selector(kind.signature)


def decode_error(data: bytes) -> ErrorKind:
    kind = ERRORS_BY_SELECTOR.get(bytes(data))
    if kind is None:
        raise AbiError(f"Unrecognised revert data: 0x{bytes(data).hex()}")
    return kind


@dataclass(frozen=True)
class LogRecord:
    """Encoded event as appended to the ledger log"""
    address: str
    topics: Tuple[bytes, ...]
    data: bytes

    def to_dict(self) -> dict:
        return {
            'address': self.address,
            'topics': ["0x" + t.hex() for t in self.topics],
            'data': "0x" + self.data.hex()
        }


def encode_event(contract: str, event) -> LogRecord:
    """Topic0 is the signature digest, topic1 the indexed address"""
    topics = (event_topic(event.signature), encode_address(event.indexed))
    return LogRecord(address=contract, topics=topics, data=encode_uint256(event.amount))


def decode_event(record: LogRecord):
    if len(record.topics) != 2:
        raise AbiError(f"Expected 2 topics, got {len(record.topics)}")

    for event_type in EVENT_TYPES:
        if record.topics[0] == event_topic(event_type.signature):
            return event_type(decode_address(record.topics[1]), decode_uint256(record.data))

    raise AbiError(f"Unknown event topic: 0x{record.topics[0].hex()}")
