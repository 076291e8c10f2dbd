from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from campus_erp.admin import router as admin_router
from campus_erp.attendance import router as attendance_router
from campus_erp.auth import router as auth_router
from campus_erp.courses import router as courses_router
from campus_erp.exams import router as exams_router
from campus_erp.faculty import router as faculty_router
from campus_erp.feedback import router as feedback_router
from campus_erp.fees import router as fees_router
from campus_erp.grievances import router as grievances_router
from campus_erp.health import router as health_router
from campus_erp.hostel import router as hostel_router
from campus_erp.placements import router as placements_router
from campus_erp.students import router as students_router
from campus_erp.uploads import router as uploads_router
from campus_erp.config.settings import settings
from campus_erp.database import DocumentStore
from campus_erp.errors import register_error_handlers
from campus_erp.storage.service import ObjectStorage
from mangum import Mangum

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


def _allowed_origins() -> list:
    if settings.ALLOW_ALL_ORIGINS:
        return ["*"]

    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:5173", # Common port for local Vite dev
    ]
    if settings.FRONTEND_URL:
        allowed_origins.append(settings.FRONTEND_URL)
        if settings.FRONTEND_URL.endswith("/"):
            allowed_origins.append(settings.FRONTEND_URL.rstrip("/"))
    return allowed_origins


def create_app(
    store: Optional[DocumentStore] = None,
    object_storage: Optional[ObjectStorage] = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application.

    `store` and `object_storage` default to AWS-backed instances built at
    startup; pass them in to run against other implementations.
    """
    logger.info(f"Creating FastAPI app - Environment: {settings.APP_ENV}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One store and one object storage client per process
        app.state.store = store if store is not None else DocumentStore.from_settings(settings)
        app.state.object_storage = object_storage if object_storage is not None else ObjectStorage.from_settings(settings)
        logger.info("Application startup completed successfully")
        try:
            yield
        finally:
            if store is None:
                app.state.store.close()
            if object_storage is None:
                app.state.object_storage.close()
            logger.info("AWS clients closed")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=settings.API_DOCS_URL,
        redoc_url=settings.API_REDOC_URL,
        openapi_url=settings.API_OPENAPI_URL,
        lifespan=lifespan,
    )

    allowed_origins = _allowed_origins()
    logger.info(f"CORS allowed origins: {allowed_origins}")

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, expose_details=settings.EXPOSE_ERROR_DETAILS)

    # Include routers
    app.include_router(health_router.router)
    app.include_router(auth_router.router)
    app.include_router(students_router.router)
    app.include_router(faculty_router.router)
    app.include_router(admin_router.router)
    app.include_router(courses_router.router)
    app.include_router(attendance_router.router)
    app.include_router(fees_router.router)
    app.include_router(hostel_router.router)
    app.include_router(exams_router.router)
    app.include_router(placements_router.router)
    app.include_router(grievances_router.router)
    app.include_router(feedback_router.router)
    app.include_router(uploads_router.router)

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

    uvicorn.run(_fastapi_app,
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False)
