import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from mangum import Mangum
from school_registry.health import router as health_router
from school_registry.schools import router as schools_router
from school_registry.schools.storage import ImageStore
from school_registry.config.settings import Settings, settings
from school_registry.database import create_db_engine, create_session_factory, describe_database_url

# Configure logging for Lambda
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

# Force the root logger to INFO level explicitly
logging.getLogger().setLevel(logging.INFO)

# Prevent duplicate logs from uvicorn when running locally
if settings.APP_ENV != 'development':
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("uvicorn.error").propagate = False

logger = logging.getLogger(__name__)


def build_allowed_origins(config: Settings) -> list:
    if config.ALLOW_ALL_ORIGINS:
        return ["*"]

    allowed_origins = [
        "http://localhost:3000",  # Common port for local React/Next dev
        "http://localhost:5173",  # Common port for local Vite dev
    ]
    if config.FRONTEND_URL:
        allowed_origins.append(config.FRONTEND_URL)
        if config.FRONTEND_URL.endswith("/"):
            allowed_origins.append(config.FRONTEND_URL.rstrip("/"))
    return allowed_origins


def create_app(engine: Optional[Engine] = None, config: Settings = settings) -> FastAPI:
    """
    Create and configure a FastAPI application.

    The engine (and so the connection pool) is created once here and shared
    by every request through ``app.state``. Pass ``engine`` to use an
    existing one.
    """
    logger.info(f"Creating FastAPI app - Environment: {config.APP_ENV}")

    app = FastAPI(
        title=config.API_TITLE,
        description=config.API_DESCRIPTION,
        version=config.API_VERSION,
        docs_url=config.API_DOCS_URL,
        redoc_url=config.API_REDOC_URL,
        openapi_url=config.API_OPENAPI_URL
    )

    if engine is None:
        logger.info(f"Connecting to {describe_database_url(config)}")
        engine = create_db_engine(config)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.image_store = ImageStore(config.UPLOAD_DIR, config.IMAGE_URL_PREFIX)

    allowed_origins = build_allowed_origins(config)
    logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router.router)
    app.include_router(schools_router.router)

    # Uploaded images are public; the mount needs the directory to exist
    app.state.image_store.ensure_directory()
    app.mount(
        config.IMAGE_URL_PREFIX,
        StaticFiles(directory=config.UPLOAD_DIR),
        name="school_images",
    )

    logger.info("FastAPI app created successfully")
    return app

_fastapi_app = create_app()

# Conditionally wrap with Mangum for serverless deployment
if settings.APP_ENV != 'development':
    logger.info("Wrapping FastAPI app with Mangum for Lambda")
    app = Mangum(_fastapi_app)
else:
    app = _fastapi_app # Use the raw FastAPI app for local dev

# For local development
if __name__ == '__main__':
    import uvicorn

    port = settings.PORT
    print(f"Starting FastAPI server on port {port}...")
    print(f"Environment: {settings.APP_ENV}")
    print(f"API Documentation: http://localhost:{port}{settings.API_DOCS_URL}")

    uvicorn.run(app,
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False,
                reload=settings.APP_ENV == 'development')
