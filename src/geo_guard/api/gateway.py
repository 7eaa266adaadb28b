"""API Gateway - FastAPI application for login and admin dashboards."""

import logging, os, threading
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, List, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geo_guard.api.schemas import (
    AttemptView,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    NotificationSettingsResponse,
    NotificationTestResponse,
    UserInfo,
)
from geo_guard.api.service import LoginService
from geo_guard.common.config.settings import Config, get_config
from geo_guard.common.exceptions import (
    CredentialMismatchError,
    GeoGuardException,
    InvalidInputError,
    SuspiciousLoginError,
    UserNotFoundError,
)
from geo_guard.monitoring.metrics import MetricsCollector
from geo_guard.notifications.email_notifier import EmailNotifier, create_notifier
from geo_guard.notifications.port import NotificationPort
from geo_guard.notifications.schemas import DailySummary
from geo_guard.reporting.scheduler import DailySummaryScheduler
from geo_guard.reporting.schemas import UserDetails, UserSummary
from geo_guard.reporting.service import ReportingService
from geo_guard.storage.user_store import UserStore, seed_demo_users

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("geo_guard_api")


@dataclass
class GeoGuardServices:
    """Everything one running gateway shares: stores, services and background jobs."""
    config: Config
    notifier: NotificationPort
    login: LoginService
    reporting: ReportingService
    scheduler: Optional[DailySummaryScheduler] = None
    metrics: Optional[MetricsCollector] = None

    @classmethod
    def build(cls, config: Config) -> "GeoGuardServices":
        users = UserStore()
        if config.seed_demo_users:
            seed_demo_users(users)

        notifier = create_notifier(config)
        metrics = MetricsCollector() if config.enable_metrics else None
        login = LoginService.from_config(config, users=users, notifier=notifier, metrics=metrics)
        reporting = ReportingService(
            users=login.users,
            sessions=login.sessions,
            attempts=login.attempts,
            location_agent=login.engine.location_agent,
        )

        scheduler = None
        if config.email_configured:
            scheduler = DailySummaryScheduler(reporting, notifier, hour=config.daily_summary_hour)

        return cls(
            config=config,
            notifier=notifier,
            login=login,
            reporting=reporting,
            scheduler=scheduler,
            metrics=metrics,
        )

    def start(self) -> None:
        if self.scheduler is not None:
            self.scheduler.start()

    def shutdown(self) -> None:
        if self.scheduler is not None:
            self.scheduler.stop()
        if self.metrics is not None:
            try:
                self.metrics.shutdown()
            except IOError as e:
                logger.error(f"Failed to flush metrics on shutdown: {e}")


class ServiceManager:
    """Thread-safe services singleton manager."""

    _instance: Optional[GeoGuardServices] = None
    _lock = threading.Lock()
    _initialized = False

    @classmethod
    def get_services(cls) -> GeoGuardServices:
        """Get or create the services instance (thread-safe)."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = GeoGuardServices.build(get_config())
                    cls._instance.start()
                    cls._initialized = True
                    logger.info("GeoGuard services initialized")
        return cls._instance

    @classmethod
    def shutdown(cls) -> None:
        """Stop background jobs and drop the services."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.shutdown()
                cls._instance = None
                cls._initialized = False

                logger.info("GeoGuard services shutdown complete")


def get_services() -> GeoGuardServices:
    """Get the services instance."""
    return ServiceManager.get_services()


# =============================================================================
# CORS CONFIGURATION
# =============================================================================

def get_cors_origins() -> List[str]:
    """Get allowed CORS origins from environment.

    In production, set GEOGUARD_CORS_ORIGINS environment variable
    to a comma-separated list of allowed origins.
    """
    origins_env = os.environ.get("GEOGUARD_CORS_ORIGINS", "")

    if origins_env:
        return [origin.strip() for origin in origins_env.split(",") if origin.strip()]

    if os.environ.get("GEOGUARD_ENVIRONMENT", "development") == "production":
        logger.warning(
            "GEOGUARD_CORS_ORIGINS not set in production. "
            "CORS will be disabled. Set GEOGUARD_CORS_ORIGINS for cross-origin access."
        )
        return []

    logger.warning("Running in development mode with permissive CORS (allow_origins=['*'])")
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("GeoGuard API Gateway starting up...")
    get_services()
    logger.info("GeoGuard API Gateway ready")

    yield

    logger.info("GeoGuard API Gateway shutting down...")
    ServiceManager.shutdown()
    logger.info("GeoGuard API Gateway shutdown complete")


environment = os.environ.get("GEOGUARD_ENVIRONMENT", "development")
enable_docs_default = "false" if environment == "production" else "true"
enable_docs = os.environ.get("GEOGUARD_ENABLE_DOCS", enable_docs_default).lower() == "true"

app = FastAPI(
    title="GeoGuard API Gateway",
    description="Geo-anomaly login detection: impossible travel and concurrent locations.",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if enable_docs else None,
    redoc_url="/redoc" if enable_docs else None,
)


cors_origins = get_cors_origins()
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "GET"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    reason: Optional[str] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            request_id=getattr(request.state, "request_id", None),
            reason=reason,
        ).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are invalid input, not unprocessable entities."""
    logger.warning(
        "Request validation error",
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return _error_response(
        request, 400, "INVALID_INPUT", "Username, password, and location are required"
    )


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning(
        "Invalid input",
        extra={"request_id": getattr(request.state, "request_id", None), "error": exc.message},
    )
    return _error_response(request, 400, exc.code, exc.message)


@app.exception_handler(UserNotFoundError)
async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    """401 on login so unknown users look like bad passwords; 404 on admin lookups."""
    if request.url.path.startswith("/admin"):
        return _error_response(request, 404, exc.code, exc.message)
    return _error_response(request, 401, "INVALID_CREDENTIALS", exc.message)


@app.exception_handler(CredentialMismatchError)
async def credential_mismatch_handler(request: Request, exc: CredentialMismatchError) -> JSONResponse:
    return _error_response(request, 401, "INVALID_CREDENTIALS", exc.message)


@app.exception_handler(SuspiciousLoginError)
async def suspicious_login_handler(request: Request, exc: SuspiciousLoginError) -> JSONResponse:
    return _error_response(request, 403, exc.code, exc.message, reason=exc.reason)


@app.exception_handler(GeoGuardException)
async def geoguard_error_handler(request: Request, exc: GeoGuardException) -> JSONResponse:
    """Any other domain error is a processing failure."""
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Error in request processing",
        extra={"request_id": request_id, "error_code": exc.code},
        exc_info=True
    )
    return _error_response(request, 500, exc.code, exc.message)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors.

    Logs full exception for debugging but returns sanitized message to client.
    """
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        "Unexpected error",
        extra={"request_id": request_id, "error_type": type(exc).__name__}
    )
    return _error_response(request, 500, "internal_error", "An unexpected error occurred")


# =============================================================================
# MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to each request for tracing."""
    request_id = f"req_{uuid4().hex[:12]}"
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Missing or malformed fields", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        403: {"description": "Suspicious login refused", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Log in with a reported location",
)
def login(body: LoginRequest, request: Request) -> LoginResponse:
    """Verify credentials and evaluate the login for geo anomalies.

    Runs in the threadpool: the login service takes per-user locks and
    may send email. The login is stamped with server time; any client
    supplied timestamp is ignored.
    """
    services = get_services()
    ip_address = request.client.host if request.client else ""

    result = services.login.login(
        username=body.username,
        secret=body.password,
        location={
            "latitude": body.location.latitude,
            "longitude": body.location.longitude,
            "accuracy_meters": body.location.accuracy,
        },
        ip_address=ip_address,
    )

    return LoginResponse(
        outcome=result.outcome,
        user=UserInfo(id=result.user_id, username=result.username),
        session_id=result.session.session_id,
        multiple_locations=result.flagged_multilocation,
        active_location_count=result.location_report.location_count,
    )


@app.get("/admin/login-attempts", response_model=List[AttemptView])
async def login_attempts() -> List[AttemptView]:
    """All retained login attempts, most recent first."""
    return [AttemptView.from_record(a) for a in get_services().reporting.login_attempts()]


@app.get("/admin/users", response_model=List[UserSummary])
async def users() -> List[UserSummary]:
    """Per-user session counts and active locations."""
    return get_services().reporting.user_summaries()


@app.get(
    "/admin/user-details/{user_id}",
    response_model=UserDetails,
    responses={404: {"description": "Unknown user", "model": ErrorResponse}},
)
async def user_details(user_id: str) -> UserDetails:
    """A user's retained sessions, most recent first."""
    return get_services().reporting.user_details(user_id)


@app.get("/admin/daily-summary", response_model=DailySummary)
async def daily_summary() -> DailySummary:
    """Activity over the last day, as it would be emailed."""
    return get_services().reporting.daily_summary()


@app.post("/admin/test-notification", response_model=NotificationTestResponse)
def send_test_notification() -> NotificationTestResponse:
    """Check the SMTP login and send a test email to the admins."""
    services = get_services()
    notifier = services.notifier

    if not isinstance(notifier, EmailNotifier):
        return NotificationTestResponse(
            success=False,
            message="Email not configured. Set EMAIL_USER and EMAIL_PASS.",
        )

    if not notifier.verify_connection():
        return NotificationTestResponse(
            success=False,
            message="Email configuration test failed. Check your credentials.",
        )

    notifier.send(
        "GeoGuard Test Notification",
        "This is a test notification from GeoGuard. Email alerts are working.",
    )
    return NotificationTestResponse(success=True, message="Test notification sent")


@app.get("/admin/notification-settings", response_model=NotificationSettingsResponse)
async def notification_settings() -> NotificationSettingsResponse:
    """Current alerting configuration."""
    services = get_services()
    config = services.config
    return NotificationSettingsResponse(
        admin_emails=config.admin_emails,
        email_configured=config.email_configured,
        channel=services.notifier.channel,
        alert_on_suspicious_activity=services.login.alert_on_suspicious_activity,
        daily_summary_hour=config.daily_summary_hour,
    )


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "service": "geo-guard-gateway"}


@app.get("/ready")
async def readiness_check() -> dict:
    """Readiness check endpoint.

    Returns 503 until the services singleton is initialized.
    """
    if not ServiceManager._initialized:
        raise HTTPException(status_code=503, detail="not_ready")
    return {"status": "ready", "service": "geo-guard-gateway"}
