"""FastAPI app: read-only access to records and profiles by index/id."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from starlette.middleware.base import BaseHTTPMiddleware

from recordgen import __version__
from recordgen.config import get_config, get_config_hash
from recordgen.generator import IdempotentGenerator
from recordgen.logging_config import get_logger
from recordgen.schemas import UINT64_SPACE, GeneratorConfig

logger = get_logger(__name__)

MAX_UINT64 = UINT64_SPACE - 1


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    app.state.config_hash = get_config_hash(config)
    app.state.max_page_size = int(config.get("api", {}).get("max_page_size", 1000))
    app.state.generator = IdempotentGenerator(
        GeneratorConfig.model_validate(config.get("generator") or {})
    )
    logger.info("Generator loaded: config_hash=%s", app.state.config_hash)
    yield


app = FastAPI(title="Record Generator API", version=__version__, lifespan=lifespan)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Echo X-Correlation-ID (generated when absent) on every response."""

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


app.add_middleware(CorrelationIdMiddleware)


def _generator(request: Request) -> IdempotentGenerator:
    return request.app.state.generator


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/config")
def config_summary(request: Request) -> dict[str, Any]:
    """Config hash and profile space; two servers with the same hash serve identical records."""
    gen = _generator(request)
    return {
        "config_hash": request.app.state.config_hash,
        "profile_space_size": gen.config.profile_space_size,
        "buckets": [b.model_dump() for b in gen.config.buckets],
    }


@app.get("/records/{index}")
def get_record(request: Request, index: int) -> dict[str, Any]:
    if not 0 <= index <= MAX_UINT64:
        raise HTTPException(status_code=422, detail="index must be in [0, 2**64)")
    return _generator(request).record_by_index(index).to_dict()


@app.get("/records")
def list_records(
    request: Request,
    start: int = Query(0, ge=0, le=MAX_UINT64),
    count: int = Query(10, ge=0),
) -> dict[str, Any]:
    """Records [start, start + count); count is capped by api.max_page_size."""
    max_page = request.app.state.max_page_size
    if count > max_page:
        raise HTTPException(status_code=422, detail=f"count must be <= {max_page}")
    try:
        records = _generator(request).iterate(start, count)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"start": start, "count": count, "records": [r.to_dict() for r in records]}


@app.get("/profiles/{profile_id}")
def get_profile(request: Request, profile_id: int) -> dict[str, Any]:
    if not 0 <= profile_id <= MAX_UINT64:
        raise HTTPException(status_code=422, detail="profile_id must be in [0, 2**64)")
    gen = _generator(request)
    payload = gen.profile_by_id(profile_id).to_dict()
    payload["bucket"] = gen.bucket_for_profile(profile_id).model_dump()
    return payload
