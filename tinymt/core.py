"""TinyMT64 recurrence: seeding, state transition and tempering.

Every function here operates on a ``GeneratorState`` and a ``TinyMTParams``
and keeps all arithmetic inside 64 unsigned bits, so the output sequence is
bit-for-bit identical to the reference generator.
"""

import struct
from typing import Sequence

from .models import MASK64, GeneratorState, TinyMTParams

MEXP = 127
MIN_LOOP = 8
MASK = 0x7FFFFFFFFFFFFFFF
SH0 = 12
SH1 = 11
SH8 = 8

_CONV_MASK = 0x3FF0000000000000
_CONV_OPEN_MASK = 0x3FF0000000000001
_DOUBLE_MUL = 1.0 / 9007199254740992.0  # 2**-53


def _mix1(x: int) -> int:
    return ((x ^ (x >> 59)) * 2173292883993) & MASK64


def _mix2(x: int) -> int:
    return ((x ^ (x >> 59)) * 58885565329898161) & MASK64


def _bits_to_double(u: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", u))[0]


def period_certification(state: GeneratorState) -> GeneratorState:
    """Move the state off the all-zero fixed point of the recurrence."""
    if (state.status0 & MASK) == 0 and state.status1 == 0:
        state.status0 = ord("T")
        state.status1 = ord("M")
    return state


def init_state(state: GeneratorState, seed: int, params: TinyMTParams) -> GeneratorState:
    """Seed ``state`` from a single 64-bit integer."""
    status = [
        (seed ^ (params.mat1 << 32)) & MASK64,
        params.mat2 ^ params.tmat,
    ]
    for i in range(1, MIN_LOOP):
        prev = status[(i - 1) & 1]
        status[i & 1] ^= (i + 6364136223846793005 * (prev ^ (prev >> 62))) & MASK64

    state.status0, state.status1 = status
    return period_certification(state)


def init_state_by_array(
    state: GeneratorState, init_key: Sequence[int], params: TinyMTParams
) -> GeneratorState:
    """Seed ``state`` from an arbitrary-length sequence of 64-bit integers."""
    lag = 1
    mid = 1
    size = 4

    key_length = len(init_key)
    st = [0, params.mat1, params.mat2, params.tmat]
    count = max(key_length + 1, MIN_LOOP)

    r = _mix1(st[0] ^ st[mid % size] ^ st[(size - 1) % size])
    st[mid % size] = (st[mid % size] + r) & MASK64
    r = (r + key_length) & MASK64
    st[(mid + lag) % size] = (st[(mid + lag) % size] + r) & MASK64
    st[0] = r
    count -= 1

    i = 1
    j = 0
    # key material first, then index-only folding until count is reached
    while j < count:
        r = _mix1(st[i] ^ st[(i + mid) % size] ^ st[(i + size - 1) % size])
        st[(i + mid) % size] = (st[(i + mid) % size] + r) & MASK64
        if j < key_length:
            r = (r + init_key[j] + i) & MASK64
        else:
            r = (r + i) & MASK64
        st[(i + mid + lag) % size] = (st[(i + mid + lag) % size] + r) & MASK64
        st[i] = r
        i = (i + 1) % size
        j += 1

    for _ in range(size):
        r = _mix2((st[i] + st[(i + mid) % size] + st[(i + size - 1) % size]) & MASK64)
        st[(i + mid) % size] ^= r
        r = (r - i) & MASK64
        st[(i + mid + lag) % size] ^= r
        st[i] = r
        i = (i + 1) % size

    state.status0 = st[0] ^ st[1]
    state.status1 = st[2] ^ st[3]
    return period_certification(state)


def next_state(state: GeneratorState, params: TinyMTParams) -> GeneratorState:
    """Advance the state by one step of the recurrence."""
    state.status0 &= MASK
    x = state.status0 ^ state.status1
    x ^= (x << SH0) & MASK64
    x ^= x >> 32
    x ^= (x << 32) & MASK64
    x ^= (x << SH1) & MASK64
    state.status0 = state.status1
    state.status1 = x
    if x & 1:
        state.status0 ^= params.mat1
        state.status1 ^= params.mat2 << 32
    return state


def _tempered(state: GeneratorState) -> int:
    x = (state.status0 + state.status1) & MASK64
    return x ^ (state.status0 >> SH8)


def temper(state: GeneratorState, params: TinyMTParams) -> int:
    """Unsigned 64-bit output for the current state."""
    x = _tempered(state)
    if x & 1:
        x ^= params.tmat
    return x


def temper_conv(state: GeneratorState, params: TinyMTParams) -> float:
    """Double in [1.0, 2.0) built directly from the tempered mantissa bits."""
    x = _tempered(state)
    if x & 1:
        x ^= params.tmat
    return _bits_to_double((x >> 12) | _CONV_MASK)


def temper_conv_open(state: GeneratorState, params: TinyMTParams) -> float:
    """Double in (1.0, 2.0); the lowest mantissa bit is always set."""
    x = _tempered(state)
    if x & 1:
        x ^= params.tmat
    return _bits_to_double((x >> 12) | _CONV_OPEN_MASK)


def uint64_to_double(value: int) -> float:
    """Map a 64-bit output to [0.0, 1.0) using its top 53 bits."""
    return (value >> 11) * _DOUBLE_MUL
