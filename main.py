from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from config.settings import settings
from config.database import engine, Base
from auth.exceptions import AuthError
from files.exceptions import SearchError
from files.router import router as files_router

# Logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: optional schema creation, pool disposal on shutdown"""
    try:
        if settings.CREATE_TABLES:
            import models  # noqa: F401 registers the tables on Base.metadata
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Startup error: {str(e)}")
        raise

    yield

    await engine.dispose()
    logger.info("Database pool closed")

app = FastAPI(
    title="File Search API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Authorization"],
    expose_headers=["Content-Length"],
    allow_credentials=True,
    max_age=12 * 60 * 60,
)

@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )

@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

# Routers
app.include_router(files_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL
    )
