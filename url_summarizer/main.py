import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from url_summarizer.config import Settings, configure_logging, load_settings
from url_summarizer.errors import ConfigurationError, SummarizerError
from url_summarizer.schemas import ErrorResponse, SummarizeRequest, SummarizeResponse
from url_summarizer.workflow import as_summarizer_error, summarize_url, validation_error_from

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_HTTP_ERROR_LABELS = {404: "Not found", 405: "Method not allowed"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = app.state.settings.missing()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        raise ConfigurationError.for_missing(missing)
    logger.info("URL Summarizer starting up")
    yield
    logger.info("URL Summarizer shutting down")


async def add_cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def summarizer_error_handler(request: Request, exc: SummarizerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = validation_error_from(exc.errors())
    logger.warning(f"Rejected request: {error.error}")
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    label = _HTTP_ERROR_LABELS.get(exc.status_code, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content={"error": label}, headers=exc.headers)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside the middleware stack, so CORS headers are set here.
    error = as_summarizer_error(exc)
    return JSONResponse(status_code=error.status_code, content=error.to_payload(), headers=CORS_HEADERS)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the server. `transport` replaces outbound HTTP (used by tests)."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="URL Summarizer",
        description="Summarizes a web page in one sentence using a generative-language API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.transport = transport

    app.middleware("http")(add_cors_headers)
    app.add_exception_handler(SummarizerError, summarizer_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/")
    async def index() -> dict:
        return {
            "message": "Welcome to the URL Summarizer API",
            "endpoints": {
                "summarize": 'POST /summarize with {"url": "https://example.com"}',
            },
        }

    @app.post(
        "/summarize",
        response_model=SummarizeResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def summarize(payload: SummarizeRequest, request: Request) -> SummarizeResponse:
        logger.info(f"Summarize request: {payload.url}")
        try:
            return await summarize_url(payload.url, request.app.state.settings, request.app.state.transport)
        except Exception as exc:
            raise as_summarizer_error(exc) from None

    return app


def run() -> None:
    """Console entry point: validate configuration, then serve with uvicorn."""
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    missing = settings.missing()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        logger.error("Please create a .env file based on .env.example")
        sys.exit(1)

    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
