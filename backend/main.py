"""
FastAPI Backend for the Bedrock Addon Generator

API Structure:
- /api/generate/addon - Build .mcaddon/.mcpack archives from definitions
- /api/generate/ai-concept - Expand a natural-language idea with Gemini
- /health - Health check

Every error body carries error, details, requestId and errorType.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from config import HOST, PORT, CORS_ORIGINS, LOG_LEVEL, ConfigError
from addon_generator import __version__
from routers import addons, concepts
from routers.common import error_response, new_request_id

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Bedrock Addon Generator API",
    description="AI-assisted Minecraft Bedrock addon generator",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(addons.router)
app.include_router(concepts.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies (e.g. bad namespace) fail before any assembly work"""
    request_id = new_request_id()
    logger.warning(f"[API][{request_id}] Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Invalid request",
        request_id,
        "RequestValidationError",
        details=[
            {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
            for error in exc.errors()
        ],
    )


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    request_id = new_request_id()
    logger.error(f"[API][{request_id}] Configuration error: {exc}")
    return error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Service not configured",
        request_id,
        "ConfigError",
        details=str(exc),
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Bedrock Addon Generator API",
        "version": __version__,
        "endpoints": {
            "addon": "/api/generate/addon",
            "aiConcept": "/api/generate/ai-concept",
            "health": "/health",
        },
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn

    print(f"""
    ╔════════════════════════════════════════════════════╗
    ║  Bedrock Addon Generator API                       ║
    ╚════════════════════════════════════════════════════╝

    🚀 Starting server...
    📡 API: http://{HOST}:{PORT}
    📖 Docs: http://{HOST}:{PORT}/docs

    Endpoints:
    - POST /api/generate/addon      - Build addon archives
    - POST /api/generate/ai-concept - Expand a concept with AI

    Press Ctrl+C to stop
    """)

    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
    )
