from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.config import settings
from backend.models.chat import ChatRequest, ChatResponse, ErrorResponse, HistoryEntry
from backend.services import chat_bridge as bridge_module
from backend.utils.logger import logger


app = FastAPI(default_response_class=JSONResponse)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(RequestValidationError)
async def invalid_request(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return _error(500, f"Invalid request: {details}")


@app.get("/api/healthz")
async def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
)
async def chat(req: ChatRequest):
    try:
        return await _answer_chat(req.message, req.history)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Chat failed")
        return _error(500, str(exc))


async def _answer_chat(message: str, history: List[HistoryEntry]) -> ChatResponse:
    # The provider SDK is blocking; keep the event loop free while it waits
    return await asyncio.to_thread(bridge_module.chat_bridge.answer, message, history)


# Serve frontend
root_dir = Path(__file__).resolve().parents[1]
frontend_dir = root_dir / "frontend"
if frontend_dir.exists():
    app.mount("/", StaticFiles(directory=str(frontend_dir), html=True), name="frontend")
