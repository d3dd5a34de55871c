import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config.settings import settings
from app.core.limiter import limiter
from app.modules.auth import routes as auth_routes
from app.modules.users import routes as users_routes
from app.modules.households import routes as households_routes
from app.modules.onboarding import routes as onboarding_routes
from app.modules.tasks import routes as tasks_routes
from app.modules.calendar import routes as calendar_routes
from app.modules.budget import routes as budget_routes
from app.modules.invitations import routes as invitations_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/v1"

FEATURE_ROUTERS = (
    auth_routes.router,
    users_routes.router,
    households_routes.router,
    onboarding_routes.router,
    tasks_routes.router,
    calendar_routes.router,
    budget_routes.router,
    invitations_routes.router,
)

for feature_router in FEATURE_ROUTERS:
    app.include_router(feature_router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    logger.info("%s starting (environment=%s)", settings.app_name, settings.environment)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("%s stopped", settings.app_name)


@app.get("/")
async def root():
    return {"name": settings.app_name, "api": API_PREFIX, "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness check; the Supabase client connects lazily on the first request."""
    return {"status": "ready"}
