"""State and parameter containers for the TinyMT64 generator."""

from dataclasses import dataclass

MASK64 = (1 << 64) - 1
MASK32 = (1 << 32) - 1

DEFAULT_MAT1 = 0xFA051F40
DEFAULT_MAT2 = 0xFFD0FFF4
DEFAULT_TMAT = 0x58D02FFEFFBFFFBC


@dataclass(frozen=True)
class TinyMTParams:
    """Transition (mat1, mat2) and tempering (tmat) parameters."""

    mat1: int = DEFAULT_MAT1
    mat2: int = DEFAULT_MAT2
    tmat: int = DEFAULT_TMAT

    def validate(self) -> "TinyMTParams":
        for name, value, mask in (
            ("mat1", self.mat1, MASK32),
            ("mat2", self.mat2, MASK32),
            ("tmat", self.tmat, MASK64),
        ):
            if not isinstance(value, int) or value < 0 or value > mask:
                raise ValueError(
                    f"'{name}' must be an unsigned {mask.bit_length()}-bit integer, got {value!r}."
                )
        return self


DEFAULT_PARAMS = TinyMTParams()


@dataclass
class GeneratorState:
    status0: int = 0
    status1: int = 0

    def copy(self) -> "GeneratorState":
        return GeneratorState(self.status0, self.status1)

    def validate(self) -> "GeneratorState":
        for name, value in (("status0", self.status0), ("status1", self.status1)):
            if not isinstance(value, int) or value < 0 or value > MASK64:
                raise ValueError(f"'{name}' must be an unsigned 64-bit integer, got {value!r}.")
        return self
