from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from hostdash.config import HostdashConfig, load_config
from hostdash.logging_setup import configure_logging
from hostdash.snapshot import SnapshotAssembler, build_assembler

LOGGER = logging.getLogger(__name__)


def create_app(
    config: HostdashConfig | None = None,
    assembler: SnapshotAssembler | None = None,
) -> FastAPI:
    config = config or load_config()
    assembler = assembler or build_assembler(config)

    app = FastAPI(title="hostdash")
    app.state.config = config
    app.state.assembler = assembler

    @app.get("/api/sysinfo")
    async def api_sysinfo():
        try:
            snapshot = await assembler.collect()
        except Exception:
            LOGGER.exception("failed to collect telemetry snapshot")
            return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
        return snapshot.to_dict()

    @app.get("/api/health")
    async def api_health() -> dict[str, Any]:
        return {"ok": True}

    return app


def serve(host: str | None = None, port: int | None = None) -> int:
    config = load_config()
    configure_logging(config.log_level)
    try:
        import uvicorn
    except ImportError as exc:
        raise SystemExit("uvicorn is required to run the service") from exc
    bind_host = host if host is not None else config.host
    bind_port = port if port is not None else config.port
    LOGGER.info("serving telemetry on %s:%s", bind_host, bind_port)
    uvicorn.run(
        "hostdash.app:create_app",
        host=bind_host,
        port=bind_port,
        factory=True,
    )
    return 0
