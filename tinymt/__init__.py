"""Public package surface for the TinyMT64 generator."""

from .check import CheckConfig, format_check_table, reference_check, run_check
from .models import DEFAULT_PARAMS, GeneratorState, TinyMTParams
from .prng import TinyMT64, default_entropy

__all__ = [
    "CheckConfig",
    "DEFAULT_PARAMS",
    "GeneratorState",
    "TinyMT64",
    "TinyMTParams",
    "default_entropy",
    "format_check_table",
    "reference_check",
    "run_check",
]
