import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import settings
from .errors import ScreenshotError
from .models import ScreenshotRequest, ScreenshotResponse
from .screenshot_service import ScreenshotService
from .utils import resolve_capture_kind, resolve_output_path, validate_request

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

# Global screenshot service instance
screenshot_service = ScreenshotService()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await screenshot_service.initialize()
    yield

# Create FastAPI app
app = FastAPI(
    title="Screenshot API",
    description="Capture screenshots (jpg/png) and PDFs of web pages",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
if settings.HTTPS_REDIRECT:
    app.add_middleware(HTTPSRedirectMiddleware)


def error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ScreenshotResponse(success=False, message=message).to_json(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Answer malformed bodies with the same envelope as every other failure"""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning(f"Malformed request body: {detail}")
    return error_response(f"Invalid request body: {detail}")


@app.get("/")
async def root():
    return {
        "message": "Screenshot API is running",
        "version": __version__,
        "endpoints": [
            "POST /screenshot - Capture screenshot (jpg/png/pdf)"
        ],
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    is_healthy = await screenshot_service.health_check()
    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "service": "screenshot-api",
        "browser_ready": screenshot_service.browser_ready,
    }

@app.post("/screenshot", response_model=ScreenshotResponse, response_model_exclude_none=True)
async def capture_screenshot(request: ScreenshotRequest):
    """Capture a screenshot (jpg/png) or PDF of a URL and save it to disk"""
    try:
        validate_request(request)
        kind = resolve_capture_kind(request, settings.DEFAULT_JPEG_QUALITY)
    except ScreenshotError as e:
        logger.warning(f"Rejected request for {request.url!r}: {e.message}")
        return error_response(e.message)

    try:
        output_path = resolve_output_path(request.save_path, kind.extension)
        outcome = await screenshot_service.capture(request.url, output_path, kind)
    except Exception as e:
        logger.warning(f"Capture request for {request.url!r} failed: {e}")
        return error_response(f"Error: {e}")

    return ScreenshotResponse(
        success=True,
        message=f"{outcome.label} captured successfully",
        file_path=outcome.file_path,
        format=outcome.label,
        file_size=outcome.file_size,
        dimensions=outcome.dimensions,
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
