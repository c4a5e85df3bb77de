"""Aggregate saved TinyMT64 check reports into CSV and Markdown summaries."""

from __future__ import annotations

import argparse
import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_OUT_DIR = PROJECT_ROOT / "check_logs" / "summary"

BIT_WIDTHS = {"uint64": 64, "int31": 31, "bytes": 8}

HEADER = [
    "run_name",
    "kind",
    "seeding",
    "count",
    "min",
    "max",
    "mean",
    "bit_balance",
]


@dataclass
class RunSummary:
    name: str
    kind: str
    seeding: str
    count: int
    minimum: float
    maximum: float
    mean: float
    bit_balance: Optional[float]

    @classmethod
    def from_payload(cls, name: str, payload: dict) -> "RunSummary":
        config = payload["config"]
        values = payload["values"]
        if not values:
            raise ValueError(f"Report '{name}' contains no values.")

        kind = config["kind"]
        if config["key"]:
            seeding = "key=" + ",".join(str(word) for word in config["key"])
        else:
            seeding = f"seed={config['seed']}"

        bit_balance = None
        width = BIT_WIDTHS.get(kind)
        if width is not None:
            # fraction of set bits; about 0.5 for a well-mixed sequence
            ones = sum(bin(value).count("1") for value in values)
            bit_balance = ones / (width * len(values))

        return cls(
            name=name,
            kind=kind,
            seeding=seeding,
            count=len(values),
            minimum=min(values),
            maximum=max(values),
            mean=sum(values) / len(values),
            bit_balance=bit_balance,
        )

    def as_csv_row(self) -> List[str]:
        return [
            self.name,
            self.kind,
            self.seeding,
            str(self.count),
            _format_number(self.minimum),
            _format_number(self.maximum),
            f"{self.mean:.6f}",
            "" if self.bit_balance is None else f"{self.bit_balance:.4f}",
        ]


def _format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    return f"{value:.6f}"


def _load_runs(paths: Sequence[Path]) -> List[RunSummary]:
    runs: List[RunSummary] = []
    for payload_path in paths:
        if not payload_path.exists():
            raise FileNotFoundError(f"Missing report: {payload_path}")
        payload = json.loads(payload_path.read_text())
        runs.append(RunSummary.from_payload(payload_path.stem, payload))
    return runs


def _write_csv(runs: Iterable[RunSummary], out_dir: Path) -> Path:
    csv_path = out_dir / "check_summary.csv"
    with csv_path.open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        for run in runs:
            writer.writerow(run.as_csv_row())
    return csv_path


def _write_md(runs: Iterable[RunSummary], out_dir: Path) -> Path:
    md_path = out_dir / "check_summary.md"
    table_header = (
        "| Run | Kind | Seeding | Count | Mean | Bit balance |\n"
        "| --- | --- | --- | --- | --- | --- |"
    )
    table_rows = [
        "| {name} | {kind} | {seeding} | {count} | {mean:.6f} | {balance} |".format(
            name=run.name,
            kind=run.kind,
            seeding=run.seeding,
            count=run.count,
            mean=run.mean,
            balance="n/a" if run.bit_balance is None else f"{run.bit_balance:.4f}",
        )
        for run in runs
    ]
    content = ["# TinyMT64 check summary", "", table_header, *table_rows]
    md_path.write_text("\n".join(content) + "\n")
    return md_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarise saved TinyMT64 check reports")
    parser.add_argument("reports", nargs="+", type=Path, help="JSON reports written by run_check.py --log")
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=DEFAULT_OUT_DIR,
        help="Directory for check_summary.csv and check_summary.md",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    runs = _load_runs(args.reports)
    args.out_dir.mkdir(parents=True, exist_ok=True)
    _write_csv(runs, args.out_dir)
    _write_md(runs, args.out_dir)


if __name__ == "__main__":
    main()
