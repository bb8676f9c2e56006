"""Events emitted by pool operations, with their binary wire encoding.

Each event is encoded as an 8-byte discriminator followed by its fields in
declaration order, little-endian, with public keys as 32 raw bytes.
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass, field, fields
from typing import Any

DISCRIMINATOR_SIZE = 8
PUBKEY_SIZE = 32

_STRUCT_FORMATS = {
    "i16": "<h",
    "u16": "<H",
    "i32": "<i",
    "u64": "<Q",
}
_U128_SIZE = 16


def _wire(kind: str) -> Any:
    return field(metadata={"wire": kind})


def event_discriminator(name: str) -> bytes:
    """Return the 8-byte tag identifying events of the given type name."""
    return hashlib.sha256(f"event:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


@dataclass(frozen=True)
class CompositionFee:
    """Fee charged for the composition of a deposit into the active bin."""

    from_: bytes = _wire("pubkey")
    bin_id: int = _wire("i16")
    token_x_fee_amount: int = _wire("u64")
    token_y_fee_amount: int = _wire("u64")
    protocol_token_x_fee_amount: int = _wire("u64")
    protocol_token_y_fee_amount: int = _wire("u64")


@dataclass(frozen=True)
class AddLiquidity:
    """Liquidity deposited into a position."""

    lb_pair: bytes = _wire("pubkey")
    from_: bytes = _wire("pubkey")
    position: bytes = _wire("pubkey")
    amounts: tuple[int, int] = _wire("u64x2")
    active_bin_id: int = _wire("i32")


@dataclass(frozen=True)
class RemoveLiquidity:
    """Liquidity withdrawn from a position."""

    lb_pair: bytes = _wire("pubkey")
    from_: bytes = _wire("pubkey")
    position: bytes = _wire("pubkey")
    amounts: tuple[int, int] = _wire("u64x2")
    active_bin_id: int = _wire("i32")


@dataclass(frozen=True)
class Swap:
    """A completed swap through the pair."""

    lb_pair: bytes = _wire("pubkey")
    from_: bytes = _wire("pubkey")
    start_bin_id: int = _wire("i32")
    end_bin_id: int = _wire("i32")
    amount_in: int = _wire("u64")
    amount_out: int = _wire("u64")
    swap_for_y: bool = _wire("bool")
    fee: int = _wire("u64")
    protocol_fee: int = _wire("u64")
    fee_bps: int = _wire("u128")
    host_fee: int = _wire("u64")


@dataclass(frozen=True)
class ClaimReward:
    """Farm reward claimed by a position owner."""

    lb_pair: bytes = _wire("pubkey")
    position: bytes = _wire("pubkey")
    owner: bytes = _wire("pubkey")
    reward_index: int = _wire("u64")
    total_reward: int = _wire("u64")


@dataclass(frozen=True)
class FundReward:
    """Farm reward funded."""

    lb_pair: bytes = _wire("pubkey")
    funder: bytes = _wire("pubkey")
    reward_index: int = _wire("u64")
    amount: int = _wire("u64")


@dataclass(frozen=True)
class InitializeReward:
    """Farm reward initialised."""

    lb_pair: bytes = _wire("pubkey")
    reward_mint: bytes = _wire("pubkey")
    funder: bytes = _wire("pubkey")
    reward_index: int = _wire("u64")
    reward_duration: int = _wire("u64")


@dataclass(frozen=True)
class UpdateRewardDuration:
    """Farm reward duration changed."""

    lb_pair: bytes = _wire("pubkey")
    reward_index: int = _wire("u64")
    old_reward_duration: int = _wire("u64")
    new_reward_duration: int = _wire("u64")


@dataclass(frozen=True)
class UpdateRewardFunder:
    """Farm reward funder changed."""

    lb_pair: bytes = _wire("pubkey")
    reward_index: int = _wire("u64")
    old_funder: bytes = _wire("pubkey")
    new_funder: bytes = _wire("pubkey")


@dataclass(frozen=True)
class PositionClose:
    """Position closed."""

    position: bytes = _wire("pubkey")
    owner: bytes = _wire("pubkey")


@dataclass(frozen=True)
class ClaimFee:
    """Swap fees claimed by a position owner."""

    lb_pair: bytes = _wire("pubkey")
    position: bytes = _wire("pubkey")
    owner: bytes = _wire("pubkey")
    fee_x: int = _wire("u64")
    fee_y: int = _wire("u64")


@dataclass(frozen=True)
class LbPairCreate:
    """Pair created."""

    lb_pair: bytes = _wire("pubkey")
    bin_step: int = _wire("u16")
    token_x: bytes = _wire("pubkey")
    token_y: bytes = _wire("pubkey")


@dataclass(frozen=True)
class PositionCreate:
    """Position created."""

    lb_pair: bytes = _wire("pubkey")
    position: bytes = _wire("pubkey")
    owner: bytes = _wire("pubkey")


@dataclass(frozen=True)
class FeeParameterUpdate:
    """Fee parameters of a pair changed."""

    lb_pair: bytes = _wire("pubkey")
    protocol_share: int = _wire("u16")
    base_factor: int = _wire("u16")


@dataclass(frozen=True)
class IncreaseObservation:
    """Oracle observation length increased."""

    oracle: bytes = _wire("pubkey")
    new_observation_length: int = _wire("u64")


@dataclass(frozen=True)
class WithdrawIneligibleReward:
    """Reward that no position was eligible for withdrawn."""

    lb_pair: bytes = _wire("pubkey")
    reward_mint: bytes = _wire("pubkey")
    amount: int = _wire("u64")


@dataclass(frozen=True)
class UpdatePositionOperator:
    """Position operator changed."""

    position: bytes = _wire("pubkey")
    old_operator: bytes = _wire("pubkey")
    new_operator: bytes = _wire("pubkey")


@dataclass(frozen=True)
class UpdatePositionLockReleaseSlot:
    """Position lock release slot changed."""

    position: bytes = _wire("pubkey")
    current_slot: int = _wire("u64")
    new_lock_release_slot: int = _wire("u64")
    old_lock_release_slot: int = _wire("u64")
    sender: bytes = _wire("pubkey")


_EVENT_TYPES = (
    CompositionFee,
    AddLiquidity,
    RemoveLiquidity,
    Swap,
    ClaimReward,
    FundReward,
    InitializeReward,
    UpdateRewardDuration,
    UpdateRewardFunder,
    PositionClose,
    ClaimFee,
    LbPairCreate,
    PositionCreate,
    FeeParameterUpdate,
    IncreaseObservation,
    WithdrawIneligibleReward,
    UpdatePositionOperator,
    UpdatePositionLockReleaseSlot,
)

_BY_DISCRIMINATOR = {event_discriminator(cls.__name__): cls for cls in _EVENT_TYPES}


def _encode_value(kind: str, value: Any, name: str) -> bytes:
    if kind == "pubkey":
        if not isinstance(value, (bytes, bytearray)) or len(value) != PUBKEY_SIZE:
            raise ValueError(f"{name} must be {PUBKEY_SIZE} bytes")
        return bytes(value)
    if kind == "bool":
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be a bool")
        return b"\x01" if value else b"\x00"
    if kind == "u128":
        if not isinstance(value, int) or not 0 <= value < 1 << 128:
            raise ValueError(f"{name} is not a valid u128 value")
        return value.to_bytes(_U128_SIZE, "little")
    if kind == "u64x2":
        items = tuple(value)
        if len(items) != 2:
            raise ValueError(f"{name} must hold exactly two amounts")
        return b"".join(_encode_value("u64", item, name) for item in items)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    try:
        return struct.pack(_STRUCT_FORMATS[kind], value)
    except struct.error as exc:
        raise ValueError(f"{name} is not a valid {kind} value") from exc


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise ValueError("event data is truncated")
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    @property
    def exhausted(self) -> bool:
        return self._offset == len(self._data)

    def read(self, kind: str) -> Any:
        if kind == "pubkey":
            return self.take(PUBKEY_SIZE)
        if kind == "bool":
            flag = self.take(1)[0]
            if flag > 1:
                raise ValueError(f"invalid bool byte {flag}")
            return flag == 1
        if kind == "u128":
            return int.from_bytes(self.take(_U128_SIZE), "little")
        if kind == "u64x2":
            return (self.read("u64"), self.read("u64"))
        fmt = _STRUCT_FORMATS[kind]
        (value,) = struct.unpack(fmt, self.take(struct.calcsize(fmt)))
        return value


def encode_event(event: Any) -> bytes:
    """Encode an event as its discriminator followed by its fields."""
    cls = type(event)
    if cls not in _EVENT_TYPES:
        raise TypeError(f"{cls.__name__} is not a known event type")
    parts = [event_discriminator(cls.__name__)]
    parts.extend(
        _encode_value(f.metadata["wire"], getattr(event, f.name), f.name) for f in fields(cls)
    )
    return b"".join(parts)


def decode_event(data: bytes) -> Any:
    """Decode bytes produced by encode_event back into an event."""
    data = bytes(data)
    reader = _Reader(data)
    discriminator = reader.take(DISCRIMINATOR_SIZE)
    cls = _BY_DISCRIMINATOR.get(discriminator)
    if cls is None:
        raise ValueError(f"unknown event discriminator {discriminator.hex()}")
    values = {f.name: reader.read(f.metadata["wire"]) for f in fields(cls)}
    if not reader.exhausted:
        raise ValueError("trailing bytes after event data")
    return cls(**values)