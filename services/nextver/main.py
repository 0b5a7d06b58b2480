import json
import logging
import time
import uuid

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from pydantic import BaseModel

from nextver.classify import bump_patterns
from nextver.config import TOOL_VERSION, configure_logging, settings_from_env
from nextver.errors import RepositoryAccessError
from nextver.git import GitRepository
from nextver.pipeline import derive_next_version
from nextver.versions import render

load_dotenv()

# the service logs its JSON events at INFO unless told otherwise
SET = settings_from_env(default_log_level="INFO")

logger = configure_logging(SET.log_level)

app = FastAPI(title="next-version", version=TOOL_VERSION)

try:
    METRIC_REQUESTS = Counter(
        "nextver_requests_total", "Next-version derivations", ["outcome"]
    )
    METRIC_LATENCY = Histogram(
        "nextver_request_latency_seconds",
        "Latency of next-version derivation",
        buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
    )
except ValueError:
    # Already registered (e.g., module reload in tests)
    METRIC_REQUESTS = None
    METRIC_LATENCY = None


@app.middleware("http")
async def request_id_middleware(request, call_next):  # type: ignore
    req_id = str(uuid.uuid4())
    request.state.request_id = req_id
    resp = await call_next(request)
    resp.headers["X-Request-ID"] = req_id
    return resp


class NextVersionResult(BaseModel):
    version: str | None = None
    release: bool
    base_version: str
    base_tag: str | None = None
    commits: int
    major: bool
    minor: bool
    patch: bool
    request_id: str | None = None


def require_auth(request: Request):
    if SET.auth_token:
        auth = request.headers.get("Authorization")
        if not auth or auth != f"Bearer {SET.auth_token}":
            raise HTTPException(status_code=401, detail="unauthorized")
    return True


@app.get("/healthz")
def healthz():
    try:
        GitRepository.open(SET.repo_path)
        repo_ok = True
    except RepositoryAccessError:
        repo_ok = False
    return {"ok": True, "repository": repo_ok, "tag_prefix": SET.tag_prefix}


@app.get("/next-version")
def next_version(
    request: Request,
    major: str | None = None,
    minor: str | None = None,
    patch: str | None = None,
    _: bool = Depends(require_auth),
):
    start = time.time()
    try:
        patterns = bump_patterns(
            major or SET.major_pattern, minor or SET.minor_pattern, patch or SET.patch_pattern
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        repo = GitRepository.open(SET.repo_path)
        derived = derive_next_version(
            repo, patterns, tag_prefix=SET.tag_prefix, structured_logging=SET.structured_logging
        )
    except RepositoryAccessError as e:
        if METRIC_REQUESTS:
            METRIC_REQUESTS.labels(outcome="error").inc()
        logger.error("next-version: %s", e)
        raise HTTPException(status_code=503, detail=f"repository_error:{e}")

    agg = derived.aggregate
    res = NextVersionResult(
        version=derived.resolution.text if derived.resolution else None,
        release=derived.release,
        base_version=render(derived.base_version),
        base_tag=derived.base_tag,
        commits=agg.objects_visited,
        major=agg.major,
        minor=agg.minor,
        patch=agg.patch,
        request_id=getattr(request.state, "request_id", None),
    )
    if METRIC_REQUESTS:
        METRIC_REQUESTS.labels(outcome="release" if res.release else "no_release").inc()
    if METRIC_LATENCY:
        METRIC_LATENCY.observe(time.time() - start)
    if SET.structured_logging:
        logger.info(
            json.dumps(
                {
                    "event": "next_version_served",
                    "version": res.version,
                    "release": res.release,
                    "request_id": res.request_id,
                }
            )
        )
    return res


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def main():
    # Convenience CLI entrypoint: `next-version-service`
    import os

    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8787"))
    uvicorn.run("services.nextver.main:app", host=host, port=port, reload=False)
