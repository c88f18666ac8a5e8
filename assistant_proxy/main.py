# assistant_proxy/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from langchain_openai import ChatOpenAI
from openai import AsyncOpenAI
from starlette.exceptions import HTTPException as StarletteHTTPException

from assistant_proxy import dependencies
from assistant_proxy.config import (
    CORS_ORIGINS,
    OPENAI_API_KEY,
    PORT,
    VECTOR_STORE_ID,
    VISION_MAX_TOKENS,
    VISION_MODEL,
)
from assistant_proxy.logging_config import setup_logging

# Import routers
from assistant_proxy.api.routes import files, threads

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - initialize and cleanup resources."""
    setup_logging()

    # No retries anywhere: one provider error fails the request
    client = AsyncOpenAI(api_key=OPENAI_API_KEY, max_retries=0)
    dependencies.set_openai(client)
    dependencies.set_vision_llm(
        ChatOpenAI(model=VISION_MODEL, max_tokens=VISION_MAX_TOKENS, api_key=OPENAI_API_KEY, max_retries=0)
    )

    logger.info("✅ Backend running on port %s (vector store %s)", PORT, VECTOR_STORE_ID)
    try:
        yield
    finally:
        await client.close()
        dependencies.set_openai(None)
        dependencies.set_vision_llm(None)


# Create FastAPI app
app = FastAPI(
    title="Assistant Files Proxy",
    description="File search uploads and assistant threads over the OpenAI API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_exception(request: Request, exc: StarletteHTTPException):
    """Errors are returned as plain text bodies."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def plain_text_validation_error(request: Request, exc: RequestValidationError):
    """Malformed client input is a 400, not a 422."""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return PlainTextResponse(f"Invalid request: {detail}", status_code=400)


# Include routers
app.include_router(files.router, tags=["Files"])
app.include_router(threads.router, tags=["Threads"])


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy"}
