import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import appointments, auth, users
from app.core.config import Settings, _ENV_FILE, get_settings
from app.core.db import build_engine, create_session_maker, init_db
from app.core.exceptions import AppError, ValidationError
from app.services.appointment_repository import AppointmentRepository
from app.services.appointment_service import AppointmentService
from app.services.auth_service import Authenticator
from app.services.calendar_service import CalendarSyncClient
from app.services.user_repository import UserRepository
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def configure_logging(env: str) -> None:
    if env != "production":
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(
            level=logging.INFO,
            format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
        )


def _cors_headers(origin: str | None, allowed: list[str]) -> dict[str, str]:
    """Add CORS headers to error responses so the browser doesn't block them."""
    headers = {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Authorization, Content-Type",
    }
    if origin and origin in allowed:
        headers["Access-Control-Allow-Origin"] = origin
    elif allowed:
        headers["Access-Control-Allow-Origin"] = allowed[0]
    return headers


def _log_startup(settings: Settings) -> None:
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    if settings.calendar_enabled:
        logger.info("Google Calendar: configured (calendar id %s)", settings.google_calendar_id)
    else:
        logger.warning(
            "Google Calendar: NOT configured. Set GOOGLE_SERVICE_ACCOUNT_EMAIL and "
            "GOOGLE_PRIVATE_KEY to sync bookings; appointments are still accepted."
        )


def create_app(
    settings: Settings | None = None,
    calendar: CalendarSyncClient | None = None,
) -> FastAPI:
    """Build the app and every service it uses, once, with explicit wiring.

    Run with ``uvicorn app.main:create_app --factory``.
    """
    settings = settings or get_settings()
    configure_logging(settings.env)

    engine = build_engine(settings)
    session_maker = create_session_maker(engine)
    user_repository = UserRepository(session_maker)
    appointment_repository = AppointmentRepository(session_maker)
    authenticator = Authenticator(
        user_repository,
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        access_token_expire_minutes=settings.access_token_expire_minutes,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    calendar = calendar or CalendarSyncClient.from_settings(settings)
    appointment_service = AppointmentService(appointment_repository, calendar)
    user_service = UserService(user_repository, authenticator)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _log_startup(settings)
        if settings.create_tables_on_startup:
            await init_db(engine)
        if settings.seed_admin_email and settings.seed_admin_password:
            await user_service.seed_admin(settings.seed_admin_email, settings.seed_admin_password)
        yield
        try:
            await calendar.aclose()
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Appointment Booking API",
        description="Public appointment booking with admin dashboard and Google Calendar sync",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.authenticator = authenticator
    app.state.appointment_service = appointment_service
    app.state.user_service = user_service

    allowed_origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(appointments.router, prefix=settings.api_prefix)
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        headers = _cors_headers(request.headers.get("origin"), allowed_origins)
        if exc.status_code == 401:
            headers["WWW-Authenticate"] = "Bearer"
        content: dict = {"detail": exc.detail}
        if isinstance(exc, ValidationError):
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed bodies as 400 with the offending fields."""
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": errors},
            headers=_cors_headers(request.headers.get("origin"), allowed_origins),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
            headers=_cors_headers(request.headers.get("origin"), allowed_origins),
        )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app
