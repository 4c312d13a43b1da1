from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
import logging
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import get_settings
from guidance.agent import Generator, get_generator
from guidance.core.prompt import build_chat_prompt, build_guide_prompt
from guidance.errors import FALLBACK_MESSAGE, ConfigurationError
from guidance.events import encode_event


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("careerguide")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Career Guidance Chatbot server running on port %s", settings.port)
    if not settings.google_api_key:
        logger.warning(
            "Gemini API key not configured; set GEMINI_API_KEY in the environment or .env"
        )
    else:
        logger.info("Gemini API key is configured (model=%s)", settings.gemini_model)
    yield


app = FastAPI(title="Career Guidance Chatbot", version="1.0.0", lifespan=lifespan)

# CORS: allow local frontend during development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class ChatTurn(BaseModel):
    role: str = Field(..., description="'user' or 'assistant'")
    content: Optional[str] = ""


class ChatRequest(BaseModel):
    message: Optional[str] = Field(default=None, description="User's latest message")
    history: Optional[List[ChatTurn]] = Field(
        default_factory=list,
        description="Conversation so far (client-managed); only the last few turns are used",
    )


class GuideRequest(BaseModel):
    career: Optional[str] = Field(default=None, description="Career to build a guide for")


def require_generator() -> Generator:
    try:
        return get_generator()
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _event_stream(generator: Generator, prompt: str) -> Iterator[str]:
    sent = 0
    try:
        for text in generator.stream(prompt):
            sent += 1
            yield encode_event("chunk", text)
    except Exception as e:
        logger.exception("Gemini streaming failed after %s chunks: %s", sent, e)
        yield encode_event("error", FALLBACK_MESSAGE)
        return
    logger.info("Chat stream complete: %s chunks", sent)
    yield encode_event("complete")


router = APIRouter()


@router.post("/chat")
def chat(req: ChatRequest):
    if not req.message or not req.message.strip():
        return JSONResponse(status_code=400, content={"error": "Message is required"})
    generator = require_generator()

    history = [t.model_dump() for t in (req.history or [])]
    logger.info(
        "Incoming chat: message_len=%s history_turns=%s",
        len(req.message),
        len(history),
    )
    prompt = build_chat_prompt(req.message, history, settings.prompt_history_window)
    return StreamingResponse(
        _event_stream(generator, prompt),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/generate-guide")
def generate_guide(req: GuideRequest):
    career = (req.career or "").strip()
    if not career:
        return JSONResponse(status_code=400, content={"error": "Career field is required"})
    generator = require_generator()

    try:
        guide = generator.generate(build_guide_prompt(career))
    except Exception as e:
        logger.exception("Career guide generation failed: %s", e)
        return JSONResponse(
            status_code=500, content={"error": "Failed to generate career guide"}
        )

    logger.info("Guide generated for career=%r: %s chars", career, len(guide))
    return {"guide": guide}


@router.get("/health")
def health() -> Dict[str, Any]:
    return {
        "status": "OK",
        "message": "Career Guidance Chatbot API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Bare paths for API consumers, /api for the browser widget
app.include_router(router)
app.include_router(router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": "Something went wrong"},
    )


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
