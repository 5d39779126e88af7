"""Typer CLI: record, profile, sample, export, benchmark, serve, show-config."""

from __future__ import annotations

import json
import os
from pathlib import Path

import typer
from pydantic import ValidationError

from recordgen.config import get_config, get_config_hash
from recordgen.export import format_duration, record_to_json, run_benchmark, write_jsonl
from recordgen.generator import IdempotentGenerator
from recordgen.logging_config import get_logger, setup_logging
from recordgen.schemas import GeneratorConfig

app = typer.Typer(help="Idempotent synthetic record generator CLI")
logger = get_logger(__name__)


def _build_generator(config_path: str | None = None) -> tuple[IdempotentGenerator, dict]:
    config = get_config(config_path)
    setup_logging(config.get("app", {}).get("log_level", "INFO"))
    try:
        gen_cfg = GeneratorConfig.model_validate(config.get("generator") or {})
    except ValidationError as e:
        typer.echo(f"Invalid generator config:\n{e}", err=True)
        raise typer.Exit(1) from e
    return IdempotentGenerator(gen_cfg), config


def _fail(e: Exception) -> typer.Exit:
    typer.echo(str(e), err=True)
    return typer.Exit(1)


@app.command()
def record(
    index: int = typer.Argument(..., help="Record index (0 <= index < 2**64)"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Print the record for INDEX as JSON."""
    gen, _ = _build_generator(config)
    try:
        rec = gen.record_by_index(index)
    except (TypeError, ValueError) as e:
        raise _fail(e) from e
    typer.echo(json.dumps(rec.to_dict(), ensure_ascii=False, indent=2))


@app.command()
def profile(
    profile_id: int = typer.Argument(..., help="Profile identifier"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Print the undistorted profile for PROFILE_ID as JSON."""
    gen, _ = _build_generator(config)
    try:
        prof = gen.profile_by_id(profile_id)
    except (TypeError, ValueError) as e:
        raise _fail(e) from e
    payload = prof.to_dict()
    payload["bucket"] = gen.bucket_for_profile(profile_id).model_dump()
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def sample(
    start: int = typer.Option(0, "--start", "-s", help="First record index"),
    count: int = typer.Option(5, "--count", "-n", help="Number of records"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Print COUNT records starting at START, one JSON object per line."""
    gen, _ = _build_generator(config)
    try:
        records = gen.iterate(start, count)
    except (TypeError, ValueError) as e:
        raise _fail(e) from e
    for rec in records:
        typer.echo(record_to_json(rec))


@app.command()
def export(
    path: str = typer.Argument(..., help="Output JSONL path"),
    start: int = typer.Option(0, "--start", "-s", help="First record index"),
    count: int = typer.Option(1_000_000, "--count", "-n", help="Number of records"),
    progress_every: int | None = typer.Option(
        None, "--progress-every", help="Log progress every N records (0 disables)"
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Write records [START, START+COUNT) to PATH as JSON lines."""
    gen, cfg = _build_generator(config)
    every = (
        progress_every
        if progress_every is not None
        else int(cfg.get("export", {}).get("progress_every", 100_000))
    )
    logger.info(
        "Export start: config_hash=%s start=%d count=%d", get_config_hash(cfg), start, count
    )
    try:
        stats = write_jsonl(gen, path, start=start, count=count, progress_every=every)
    except (TypeError, ValueError) as e:
        raise _fail(e) from e
    size_mb = stats.bytes_written / (1024 * 1024)
    typer.echo(f"Wrote {stats.records} records to {Path(path)} ({size_mb:.2f} MB)")
    typer.echo(
        f"Took {format_duration(stats.seconds)} ({stats.records_per_second:.0f} records/s)"
    )


@app.command()
def benchmark(
    count: int = typer.Option(100_000, "--count", "-n", help="Records to generate"),
    target: int = typer.Option(
        1_000_000_000, "--target", "-t", help="Record count to project the runtime for"
    ),
    start: int = typer.Option(0, "--start", "-s", help="First record index"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Measure generation throughput (no I/O) and project the time for TARGET records."""
    gen, _ = _build_generator(config)
    try:
        result = run_benchmark(gen, count, start=start, target_records=target)
    except (TypeError, ValueError) as e:
        raise _fail(e) from e
    typer.echo(f"Generated {result.records} records in {result.seconds:.2f}s")
    typer.echo(f"Speed: {result.records_per_second:.0f} records/second")
    typer.echo(f"Average: {result.micros_per_record:.3f} microseconds per record")
    projected = format_duration(result.projected_seconds)
    typer.echo(f"Estimated time for {target:,} records: {projected}")


@app.command()
def serve(
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
    host: str | None = typer.Option(None, "--host", "-h", help="Bind host"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Start the FastAPI read API."""
    _, cfg = _build_generator(config)
    if config:
        # the app lifespan reloads config from the environment
        os.environ["RECGEN_CONFIG_PATH"] = config
    import uvicorn

    uvicorn.run(
        "recordgen.api:app",
        host=host or cfg.get("api", {}).get("host", "0.0.0.0"),
        port=port if port is not None else int(cfg.get("api", {}).get("port", 8000)),
        reload=False,
    )


@app.command("show-config")
def show_config(
    config: str | None = typer.Option(None, "--config", "-c", help="Config YAML path"),
) -> None:
    """Print the validated generator config and its hash."""
    gen, cfg = _build_generator(config)
    typer.echo(f"Config hash: {get_config_hash(cfg)}")
    typer.echo(json.dumps(gen.config.model_dump(mode="json"), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
