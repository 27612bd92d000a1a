"""
FastAPI Application
===================

Main FastAPI app setup with all routes and middleware.
Startup: logging → storage (schema / indexes) → optional admin seed.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookhub import __version__
from bookhub.api.v1 import auth_router, book_router, loan_router, user_router
from bookhub.api.v1.errors import BAD_REQUEST_CODE, error_detail
from bookhub.application.inputs import CreateUserInput
from bookhub.application.services.user_service import UserService
from bookhub.core.config import get_settings
from bookhub.core.log_config import configure_logging
from bookhub.di.container import get_container, reset_container
from bookhub.domain.exceptions import EmailAlreadyExistsError, UserNotFoundError

logger = logging.getLogger(__name__)


def seed_admin(user_service: UserService) -> None:
    """Create the ADMIN_EMAIL account if it is configured and missing."""
    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        return
    
    try:
        user_service.get_user_by_email(settings.admin_email)
        return
    except UserNotFoundError:
        pass
    
    try:
        user_service.create_user(
            CreateUserInput(
                name=settings.admin_name,
                email=settings.admin_email,
                password=settings.admin_password,
            )
        )
        logger.info(f"Seeded admin user {settings.admin_email}")
    except EmailAlreadyExistsError:
        # Another worker created it first
        pass


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    container = get_container()
    container.init_storage()
    seed_admin(container.get(UserService))
    logger.info(f"{get_settings().app_name} {__version__} started")
    yield
    reset_container()
    logger.info("Shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.
    
    This function sets up the FastAPI application with:
    - CORS middleware configuration
    - API route registration
    - Lifespan handler for storage setup and teardown
    
    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    
    application = FastAPI(
        title=settings.app_name,
        description="Library lending API: users, books, and loans",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    application.include_router(auth_router, prefix="/api/v1/auth")
    application.include_router(user_router, prefix="/api/v1/users")
    application.include_router(book_router, prefix="/api/v1/books")
    application.include_router(loan_router, prefix="/api/v1/loans")
    
    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed body or parameters, before any domain validation runs
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": error_detail("invalid request body", BAD_REQUEST_CODE)},
        )
    
    @application.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}
    
    return application


app = create_application()
