# TinyMT64 generator for deterministic sims (no external deps)
# Source: Saito & Matsumoto tinymt64 reference, check64 vectors in tests
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

from . import core
from .models import DEFAULT_PARAMS, MASK64, GeneratorState, TinyMTParams

INT32_MAX = 0x7FFFFFFF
INT32_MIN = -0x80000000

Seed = Union[int, Sequence[int]]


def default_entropy() -> int:
    """Seed source for unseeded generators: wall clock in nanoseconds."""
    return time.time_ns() & MASK64


def _fold_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError(f"Seed must be an integer, got {seed!r}.")
    # negative seeds use their absolute value
    seed = abs(seed)
    if seed > MASK64:
        raise ValueError(f"Seed must fit in 64 bits, got {seed:#x}.")
    return seed


def _check_key(init_key: Sequence[int]) -> tuple[int, ...]:
    key = tuple(init_key)
    if not key:
        raise ValueError("Seed key array must not be empty.")
    for word in key:
        if isinstance(word, bool) or not isinstance(word, int) or word < 0 or word > MASK64:
            raise ValueError(f"Seed key entries must be unsigned 64-bit integers, got {word!r}.")
    return key


def _check_int32(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer, got {value!r}.")
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"'{name}' must fit in a signed 32-bit integer, got {value}.")


@dataclass(eq=False)
class TinyMT64:
    """TinyMT64 pseudo-random number generator (127-bit state, 64-bit output).

    ``seed`` is either one integer (scalar seeding) or a non-empty sequence of
    64-bit integers (array seeding). When it is omitted, ``entropy`` is called
    once and its value becomes the scalar seed, recorded on ``seed``.

    Instances are not safe to share between threads.
    """

    seed: Optional[Seed] = None
    params: TinyMTParams = DEFAULT_PARAMS
    entropy: Callable[[], int] = field(default=default_entropy, repr=False)
    state: GeneratorState = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.params.validate()
        if self.seed is None:
            self.seed = self.entropy() & MASK64

        self.state = GeneratorState()
        if isinstance(self.seed, int):
            core.init_state(self.state, _fold_seed(self.seed), self.params)
        elif isinstance(self.seed, Sequence):
            self.seed = _check_key(self.seed)
            core.init_state_by_array(self.state, self.seed, self.params)
        else:
            raise ValueError(
                f"Seed must be an integer or a sequence of integers, got {self.seed!r}."
            )

    @classmethod
    def from_params(cls, seed: Seed, mat1: int, mat2: int, tmat: int) -> "TinyMT64":
        return cls(seed, TinyMTParams(mat1, mat2, tmat))

    def get_state_exponent(self) -> int:
        """Mersenne exponent of the period, always 127."""
        return core.MEXP

    def get_state(self) -> GeneratorState:
        return self.state.copy()

    def set_state(self, state: GeneratorState) -> None:
        state = state.copy().validate()
        if (state.status0 & core.MASK) == 0 and state.status1 == 0:
            raise ValueError("State must not be all zero under the 63-bit mask.")
        self.state = state

    def next_uint64(self) -> int:
        core.next_state(self.state, self.params)
        return core.temper(self.state, self.params)

    def next_double(self) -> float:
        """Double in [0.0, 1.0) from the top 53 bits of a 64-bit draw."""
        return core.uint64_to_double(self.next_uint64())

    def next_double01(self) -> float:
        """Double in [0.0, 1.0) via the mantissa conversion."""
        core.next_state(self.state, self.params)
        return core.temper_conv(self.state, self.params) - 1.0

    def next_double12(self) -> float:
        core.next_state(self.state, self.params)
        return core.temper_conv(self.state, self.params)

    def next_double_oc(self) -> float:
        """Double in (0.0, 1.0]."""
        core.next_state(self.state, self.params)
        return 2.0 - core.temper_conv(self.state, self.params)

    def next_double_oo(self) -> float:
        """Double in (0.0, 1.0)."""
        core.next_state(self.state, self.params)
        return core.temper_conv_open(self.state, self.params) - 1.0

    def next_int(self, start: Optional[int] = None, stop: Optional[int] = None) -> int:
        """Integer draw shaped like ``range``.

        ``next_int()`` returns a value in [0, 2**31 - 1], ``next_int(stop)``
        one in [0, stop) and ``next_int(start, stop)`` one in [start, stop).
        Bounded draws truncate ``next_double() * span``, matching the
        reference generator's sequence. An empty range yields its lower bound.
        """
        if start is None and stop is None:
            return self.next_uint64() & INT32_MAX

        if stop is None:
            _check_int32("stop", start)
            if start < 0:
                raise ValueError("'stop' must be greater than or equal to zero.")
            return int(self.next_double() * start)

        if start is None:
            start = 0
        _check_int32("start", start)
        _check_int32("stop", stop)
        if start > stop:
            raise ValueError("'start' cannot be greater than 'stop'.")
        return int(self.next_double() * (stop - start)) + start

    def next_bytes(self, buffer: bytearray) -> None:
        """Fill ``buffer`` in place, one little-endian 64-bit draw per 8 bytes."""
        if buffer is None:
            raise TypeError("'buffer' must be a writable bytes-like object, not None.")
        with memoryview(buffer) as raw, raw.cast("B") as view:
            if view.readonly:
                raise TypeError("'buffer' must be writable.")

            length = len(view)
            full = length - length % 8
            for offset in range(0, full, 8):
                view[offset:offset + 8] = self.next_uint64().to_bytes(8, "little")
            if full < length:
                view[full:] = self.next_uint64().to_bytes(8, "little")[: length - full]
