#!/usr/bin/env python3
"""
Main entrypoint for the Attendance Skip Calculator.

Serves the attendance tracking API. The session loads course records from
the record store at STORE_BASE_URL on first use and falls back to a built-in
course list when the store cannot be reached.

Examples:
    export STORE_BASE_URL=http://localhost:10000/api
    uv run main.py
"""
import uuid

import uvicorn
from fastapi import FastAPI, Request

from backend.api.main import router
from backend.core import settings
from backend.engine.stream import app_logger, request_logging_context


app = FastAPI(
    title="Attendance Skip Calculator",
    description="Track per-course attendance and project how many classes can be skipped",
    version="1.0.0",
)


@app.middleware("http")
async def attach_request_id(request: Request, call_next):
    # Ensure all logs for this request carry its id
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    async with request_logging_context(request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(router, prefix="/api")


if __name__ == "__main__":
    app_logger.info(f"Starting API server on port {settings.PORT}...")
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
