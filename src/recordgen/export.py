"""JSONL export and throughput benchmark over an index range."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path

from recordgen.generator import IdempotentGenerator
from recordgen.logging_config import get_logger
from recordgen.schemas import RawRecord

logger = get_logger(__name__)

DEFAULT_BENCHMARK_TARGET = 1_000_000_000


@dataclass
class ExportStats:
    records: int
    bytes_written: int
    seconds: float

    @property
    def records_per_second(self) -> float:
        return self.records / self.seconds if self.seconds > 0 else 0.0


@dataclass
class BenchmarkResult:
    records: int
    seconds: float
    target_records: int

    @property
    def records_per_second(self) -> float:
        return self.records / self.seconds if self.seconds > 0 else 0.0

    @property
    def micros_per_record(self) -> float:
        return self.seconds * 1e6 / self.records if self.records else 0.0

    @property
    def projected_seconds(self) -> float:
        rate = self.records_per_second
        return self.target_records / rate if rate > 0 else 0.0


def record_to_json(record: RawRecord) -> str:
    """One compact JSON object; ints stay exact beyond 2**53."""
    return json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":"))


def write_jsonl(
    generator: IdempotentGenerator,
    path: str | Path,
    start: int = 0,
    count: int = 1_000_000,
    progress_every: int = 100_000,
) -> ExportStats:
    """Write records [start, start + count) one per line. Creates parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    records = generator.iterate(start, count)
    t0 = time.perf_counter()
    written = 0
    with open(out, "w", encoding="utf-8", newline="\n") as f:
        for written, record in enumerate(records, start=1):
            f.write(record_to_json(record))
            f.write("\n")
            if progress_every > 0 and written % progress_every == 0:
                logger.info("Exported %d/%d records", written, count)
    seconds = time.perf_counter() - t0
    stats = ExportStats(records=written, bytes_written=out.stat().st_size, seconds=seconds)
    logger.info(
        "Export complete: %d records, %d bytes in %.2fs (%.0f records/s)",
        stats.records,
        stats.bytes_written,
        stats.seconds,
        stats.records_per_second,
    )
    return stats


def run_benchmark(
    generator: IdempotentGenerator,
    count: int,
    start: int = 0,
    target_records: int = DEFAULT_BENCHMARK_TARGET,
) -> BenchmarkResult:
    """Generate `count` records without I/O and project the time for `target_records`."""
    t0 = time.perf_counter()
    n = 0
    for _ in generator.iterate(start, count):
        n += 1
    result = BenchmarkResult(
        records=n, seconds=time.perf_counter() - t0, target_records=target_records
    )
    logger.info(
        "Benchmark: %d records in %.2fs (%.0f records/s)",
        result.records,
        result.seconds,
        result.records_per_second,
    )
    return result


def format_duration(seconds: float) -> str:
    """Human-readable duration: days/hours/minutes, down to seconds."""
    total = int(seconds)
    if total >= 86_400:
        days, rest = divmod(total, 86_400)
        return f"{days} days, {rest // 3600} hours, {rest % 3600 // 60} minutes"
    if total >= 3600:
        return f"{total // 3600} hours, {total % 3600 // 60} minutes"
    if total >= 60:
        return f"{total // 60} minutes, {total % 60} seconds"
    return f"{seconds:.2f} seconds"
