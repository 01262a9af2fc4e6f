import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linguatext.routers import auth, pronunciation, telegram, vocabulary
from linguatext.database import init_db
from linguatext.config import get_settings
from linguatext.errors import InvalidInput
from linguatext.services.cooldown import KeyedCooldown

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    await init_db()
    yield


app = FastAPI(
    title="LinguaText API",
    description="Backend for the LinguaText Telegram Mini App: parallel texts, vocabulary review and pronunciation practice",
    version="0.1.0",
    lifespan=lifespan,
)

# Greeting debounce lives with the app instance
app.state.greeting_cooldown = KeyedCooldown(settings.GREETING_COOLDOWN_SECONDS)

# CORS - configurable via ALLOWED_ORIGINS env var
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.info("Rejected invalid input on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


# Include routers
app.include_router(auth.router)  # Auth router has its own /api prefix
app.include_router(telegram.router, prefix="/api", tags=["telegram"])
app.include_router(vocabulary.router, prefix="/api", tags=["vocabulary"])
app.include_router(pronunciation.router, prefix="/api", tags=["pronunciation"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
