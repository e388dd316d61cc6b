"""
Trace recording and pretty printing for AES rounds.

TraceRecorder keeps recorded steps in memory unless keep_records is off,
which long streams need. It can also write them as JSON Lines to a file
and print a compact verbose line per step. Verbose output goes to stderr
by default, since stdout carries ciphertext when encrypting a stream.
"""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from .utils import state_to_hex


class TraceRecorder:
    """
    Records and outputs traces of AES execution.

    Supports:
    - JSON Lines file output  (when trace_file is set)
    - Compact verbose text    (when verbose is set)
    - In-memory records       (when keep_records is set, the default)
    """

    def __init__(
        self,
        verbose: bool = False,
        trace_file: TextIO | None = None,
        out: TextIO | None = None,
        keep_records: bool = True,
    ):
        self.verbose = verbose
        self.trace_file = trace_file
        self._out = out
        self.keep_records = keep_records
        self._records: list[dict[str, Any]] = []

    @property
    def out(self) -> TextIO:
        # resolved lazily so redirected/captured stderr is honoured
        return self._out if self._out is not None else sys.stderr

    def record(self, **kwargs) -> None:
        """Record a trace entry."""
        if self.keep_records:
            self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            # 4x4 states are written as column-major hex
            if len(obj) == 4 and all(isinstance(r, list) and len(r) == 4 for r in obj):
                return state_to_hex(obj)
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, bytes):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        block = record.get("block", 0)
        round_num = record.get("round", "?")
        operation = record.get("operation", "unknown")

        if "state" in record:
            state_hex = state_to_hex(record["state"])
            print(f"B{block:04d} R{round_num:<2} {operation:20s} STATE:{state_hex}", file=self.out)
        else:
            print(f"B{block:04d} R{round_num:<2} {operation}", file=self.out)

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str, out: TextIO | None = None) -> None:
    """Print a section header."""
    out = out or sys.stdout
    print(f"\n{'#'*70}", file=out)
    print(f"# {title}", file=out)
    print(f"{'#'*70}", file=out)


def print_result(ciphertext_hex: str, rounds: int, passed: bool = True,
                 out: TextIO | None = None) -> None:
    """Print final encryption result."""
    out = out or sys.stdout
    print(f"\n{'='*70}", file=out)
    print("RESULT", file=out)
    print(f"{'='*70}", file=out)
    print(f"Ciphertext: {ciphertext_hex}", file=out)
    print(f"Rounds: {rounds}", file=out)

    status = "PASS" if passed else "FAIL"
    marker = "[OK]" if passed else "[ERROR]"
    print(f"Verification: {marker} {status}", file=out)
    print(f"{'='*70}", file=out)
