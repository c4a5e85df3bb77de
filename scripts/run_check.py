"""Command line harness for TinyMT64 check runs."""

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_LOG_PATH = PROJECT_ROOT / "check_logs" / "latest_run.json"

if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from tinymt import CheckConfig, format_check_table, reference_check, run_check
from tinymt.check import KIND_DESCRIPTIONS
from tinymt.models import DEFAULT_MAT1, DEFAULT_MAT2, DEFAULT_TMAT


def _parse_int(value: str) -> int:
    """Accept decimal or 0x-prefixed hex integers."""

    try:
        return int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, received '{value}'.") from exc


def _parse_key_list(value: str) -> tuple[int, ...]:
    """Parse a CLI `key=1,2,3` style option into a tuple of 64-bit words."""

    if "=" in value:
        name, _, payload = value.partition("=")
        if name.strip().lower() != "key":
            raise argparse.ArgumentTypeError(
                f"Expected prefix 'key=', received '{value}'."
            )
    else:
        payload = value

    parts = [part.strip() for part in payload.split(",") if part.strip()]
    if not parts:
        raise argparse.ArgumentTypeError("Key list cannot be empty.")

    key = tuple(_parse_int(part) for part in parts)
    if any(word < 0 or word >= 1 << 64 for word in key):
        raise argparse.ArgumentTypeError("Key entries must be unsigned 64-bit integers.")
    return key


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Draw a deterministic TinyMT64 check sequence")
    parser.add_argument(
        "--seed",
        type=_parse_int,
        default=1,
        help="Scalar seed (accepts decimal or 0x-prefixed hex)",
    )
    parser.add_argument(
        "--key",
        metavar="key=list",
        type=_parse_key_list,
        default=(),
        help="Comma-separated seed words; switches to array seeding (e.g. key=1,2,3)",
    )
    parser.add_argument("--mat1", type=_parse_int, default=DEFAULT_MAT1, help="State transition parameter")
    parser.add_argument("--mat2", type=_parse_int, default=DEFAULT_MAT2, help="State transition parameter")
    parser.add_argument("--tmat", type=_parse_int, default=DEFAULT_TMAT, help="Tempering parameter")
    parser.add_argument(
        "--kind",
        choices=sorted(KIND_DESCRIPTIONS),
        default="uint64",
        help="Output kind to draw",
    )
    parser.add_argument("--rows", type=int, default=10, help="Number of output rows")
    parser.add_argument("--columns", type=int, default=3, help="Values per output row")
    parser.add_argument(
        "--format",
        choices=("json", "table"),
        default="json",
        help="Print the JSON report or a check64-style table",
    )
    parser.add_argument(
        "--reference",
        action="store_true",
        help="Print the known-answer table (seed 1 and key {1}) and exit",
    )
    parser.add_argument(
        "--log",
        nargs="?",
        type=Path,
        const=DEFAULT_LOG_PATH,
        help=(
            "Persist the JSON report to disk. Provide a path or pass the flag alone to use "
            "check_logs/latest_run.json under the repository root."
        ),
    )
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.reference:
        print(reference_check())
        return

    cfg = CheckConfig(
        seed=args.seed,
        key=args.key,
        mat1=args.mat1,
        mat2=args.mat2,
        tmat=args.tmat,
        kind=args.kind,
        rows=args.rows,
        columns=args.columns,
    )
    try:
        result = run_check(cfg)
    except ValueError as exc:
        parser.error(str(exc))

    log_path: Path | None = args.log
    if log_path is not None:
        if not log_path.is_absolute():
            log_path = (PROJECT_ROOT / log_path).resolve()

        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_path.write_text(json.dumps(result, indent=2))

    if args.format == "table":
        print(format_check_table(result))
    else:
        print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
