import pytest
from hypothesis import given
from hypothesis import strategies as st

from lbclmm.events import (
    AddLiquidity,
    ClaimFee,
    CompositionFee,
    FeeParameterUpdate,
    LbPairCreate,
    PositionClose,
    Swap,
    UpdatePositionLockReleaseSlot,
    decode_event,
    encode_event,
    event_discriminator,
)

KEY_A = bytes(range(32))
KEY_B = bytes(range(32, 64))
KEY_C = bytes([7]) * 32

U64 = st.integers(min_value=0, max_value=(1 << 64) - 1)
I32 = st.integers(min_value=-(1 << 31), max_value=(1 << 31) - 1)
KEYS = st.binary(min_size=32, max_size=32)


def _swap(**overrides):
    values = dict(
        lb_pair=KEY_A,
        from_=KEY_B,
        start_bin_id=-5,
        end_bin_id=3,
        amount_in=1_000,
        amount_out=990,
        swap_for_y=True,
        fee=10,
        protocol_fee=2,
        fee_bps=(1 << 100) + 5,
        host_fee=1,
    )
    values.update(overrides)
    return Swap(**values)


def test_discriminator_is_eight_bytes_and_stable():
    first = event_discriminator("Swap")
    assert len(first) == 8
    assert event_discriminator("Swap") == first


def test_discriminators_differ_between_events():
    names = ["Swap", "ClaimFee", "AddLiquidity", "RemoveLiquidity", "PositionClose"]
    assert len({event_discriminator(name) for name in names}) == len(names)


def test_encoding_starts_with_discriminator():
    data = encode_event(_swap())
    assert data[:8] == event_discriminator("Swap")


def test_position_close_body_is_keys_in_field_order():
    data = encode_event(PositionClose(position=KEY_A, owner=KEY_B))
    assert data[8:] == KEY_A + KEY_B


def test_signed_bin_id_is_little_endian_twos_complement():
    event = CompositionFee(
        from_=KEY_A,
        bin_id=-2,
        token_x_fee_amount=0,
        token_y_fee_amount=0,
        protocol_token_x_fee_amount=0,
        protocol_token_y_fee_amount=0,
    )
    data = encode_event(event)
    assert data[40:42] == b"\xfe\xff"


def test_swap_round_trip():
    event = _swap()
    assert decode_event(encode_event(event)) == event


@pytest.mark.parametrize(
    "event",
    [
        AddLiquidity(lb_pair=KEY_A, from_=KEY_B, position=KEY_C, amounts=(5, 6), active_bin_id=-9),
        ClaimFee(lb_pair=KEY_A, position=KEY_B, owner=KEY_C, fee_x=1, fee_y=2),
        LbPairCreate(lb_pair=KEY_A, bin_step=25, token_x=KEY_B, token_y=KEY_C),
        FeeParameterUpdate(lb_pair=KEY_A, protocol_share=2500, base_factor=10000),
        UpdatePositionLockReleaseSlot(
            position=KEY_A,
            current_slot=1,
            new_lock_release_slot=2,
            old_lock_release_slot=3,
            sender=KEY_B,
        ),
    ],
)
def test_round_trip_various_events(event):
    assert decode_event(encode_event(event)) == event


@given(
    lb_pair=KEYS,
    sender=KEYS,
    start=I32,
    end=I32,
    amount_in=U64,
    amount_out=U64,
    swap_for_y=st.booleans(),
    fee_bps=st.integers(min_value=0, max_value=(1 << 128) - 1),
)
def test_swap_round_trip_property(lb_pair, sender, start, end, amount_in, amount_out, swap_for_y, fee_bps):
    event = _swap(
        lb_pair=lb_pair,
        from_=sender,
        start_bin_id=start,
        end_bin_id=end,
        amount_in=amount_in,
        amount_out=amount_out,
        swap_for_y=swap_for_y,
        fee_bps=fee_bps,
    )
    assert decode_event(encode_event(event)) == event


def test_unknown_discriminator_rejected():
    data = encode_event(PositionClose(position=KEY_A, owner=KEY_B))
    with pytest.raises(ValueError, match="unknown event"):
        decode_event(b"\x00" * 8 + data[8:])


def test_truncated_data_rejected():
    data = encode_event(_swap())
    with pytest.raises(ValueError, match="truncated"):
        decode_event(data[:-1])


def test_trailing_data_rejected():
    data = encode_event(_swap())
    with pytest.raises(ValueError, match="trailing"):
        decode_event(data + b"\x00")


def test_invalid_bool_byte_rejected():
    data = bytearray(encode_event(_swap(swap_for_y=False)))
    # swap_for_y follows discriminator, two keys, two i32 and two u64.
    data[8 + 32 + 32 + 4 + 4 + 8 + 8] = 2
    with pytest.raises(ValueError, match="bool"):
        decode_event(bytes(data))


def test_wrong_key_length_rejected():
    with pytest.raises(ValueError, match="32 bytes"):
        encode_event(PositionClose(position=b"short", owner=KEY_B))


def test_out_of_range_amount_rejected():
    with pytest.raises(ValueError):
        encode_event(_swap(amount_in=1 << 64))


def test_out_of_range_fee_bps_rejected():
    with pytest.raises(ValueError):
        encode_event(_swap(fee_bps=-1))


def test_non_event_rejected():
    with pytest.raises(TypeError):
        encode_event(object())