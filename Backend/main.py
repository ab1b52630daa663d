import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.errors import AppError, ConfigurationError
from routers import auth, generate, github

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing secrets are a deployment fault: refuse to start
    missing = settings.missing_secrets()
    if missing:
        logger.critical("Missing required configuration: %s", ", ".join(missing))
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
    logger.info("✅ Configuration loaded. Gemini model %s, OpenAI model %s", settings.gemini_model, settings.openai_model)
    yield


# ------------------------------
# FastAPI App Setup
# ------------------------------
app = FastAPI(title="GitHub Portfolio API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------
# Error Handlers
# ------------------------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ------------------------------
# Include Routers
# ------------------------------
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(github.router, prefix="/api/github", tags=["GitHub Data"])
app.include_router(generate.router, prefix="/api/ai", tags=["Portfolio Generation"])


@app.get("/")
async def root():
    return {"message": "GitHub Portfolio Backend is running!"}


@app.get("/ping")
async def ping():
    return {"status": "ok"}


# ------------------------------
# Local Development Only
# ------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
