from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, TextIO

ENTRY_OPEN = "entry-open"
TRUNCATED_RECORD = "truncated-record"
MALFORMED_RECORD = "malformed-record"
SCHEMA_DECODE = "schema-decode"


@dataclass(frozen=True)
class Diagnostic:
    category: str
    entry: str
    message: str
    record: int | None = None

    def describe(self) -> str:
        where = self.entry if self.record is None else f"{self.entry} record #{self.record}"
        return f"[{self.category}] {where}: {self.message}"


@dataclass
class ConversionLog:
    """
    Collects recoverable problems hit while scanning an archive.

    Each diagnostic is echoed to ``echo`` as it happens (when set) and the
    full list is written to ``destination`` on ``flush()``.
    """

    destination: Path | None = None
    echo: TextIO | None = None

    def __post_init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def record(self, category: str, entry: str, message: str, *, record: int | None = None) -> Diagnostic:
        diagnostic = Diagnostic(category=category, entry=entry, message=message, record=record)
        self.diagnostics.append(diagnostic)
        if self.echo is not None:
            print(f"[!] {diagnostic.describe()}", file=self.echo)
        return diagnostic

    def count(self, category: str) -> int:
        return sum(1 for diagnostic in self.diagnostics if diagnostic.category == category)

    def flush(self) -> None:
        if self.destination is None:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        lines = [f"#{idx:04d} {diagnostic.describe()}" for idx, diagnostic in enumerate(self.diagnostics, start=1)]
        self.destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
