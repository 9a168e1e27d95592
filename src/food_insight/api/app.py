"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_insight.api.models import (
    AnalyzeFoodRequest,
    DashboardRequest,
    ProfileRequest,
    QuickTargetRequest,
)
from food_insight.api.payloads import (
    dashboard_payload,
    estimate_payload,
    profile_payload,
    quick_target_payload,
    timestamp,
)
from food_insight.app_logging import configure_logging
from food_insight.config import parse_allowed_origins
from food_insight.containers import AppContainer
from food_insight.errors import (
    FoodInsightError,
    InternalError,
    NotFound,
    ServiceUnavailable,
    ValidationError,
)
from food_insight.services.calculator import (
    compute_dashboard,
    compute_profile,
    quick_target,
)

ENDPOINTS = {
    "health": "/",
    "analyzeFood": "/api/analyze-food-base64",
    "userProfile": "/api/user/profile",
    "dashboard": "/api/user/dashboard",
    "calculateTarget": "/api/calculate-target",
}
AVAILABLE_ENDPOINTS = [
    "/",
    "/api/analyze-food-base64",
    "/api/test-simple",
    "/api/user/profile",
    "/api/user/dashboard",
    "/api/calculate-target",
]


def create_app(container: AppContainer) -> FastAPI:  # noqa: C901, PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Food Insight API starting: ai_connected=%s",
            app.state.container.ai_connected,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept", "User-Agent"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(FoodInsightError)
    async def handle_app_error(
        request: Request, exc: FoodInsightError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'][1:]) or 'body'}: "
            f"{error['msg']}"
            for error in exc.errors()
        )
        logger.info("Invalid request body for %s: %s", request.url.path, details)
        return _error_response(
            status.HTTP_400_BAD_REQUEST, f"Invalid request body: {details}"
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code in {
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        }:
            logger.info("Route not found: %s %s", request.method, request.url.path)
            missing = NotFound("Endpoint not found")
            return JSONResponse(
                status_code=missing.status_code,
                content={
                    "success": False,
                    "error": missing.message,
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
            )
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

    @app.get("/")
    async def health(request: Request) -> dict[str, object]:
        """Health check with AI connectivity details."""
        state_container: AppContainer = request.app.state.container
        return {
            "status": "Server is running",
            "timestamp": timestamp(),
            "aiConnected": state_container.ai_connected,
            "apiKeyPresent": state_container.settings.api_key_present,
            "endpoints": ENDPOINTS,
        }

    @app.post("/api/test-simple")
    async def test_simple(
        payload: Any = Body(default=None),  # noqa: ANN401
    ) -> dict[str, object]:
        """Echo the request body."""
        logger.info("Simple test received: %s", payload)
        return {
            "success": True,
            "message": "Simple test successful",
            "receivedData": payload,
            "timestamp": timestamp(),
        }

    @app.get("/api/analyze-food-base64")
    async def analyze_food_usage() -> dict[str, object]:
        """Describe how to call the analysis endpoint."""
        return {
            "success": True,
            "message": "Base64 endpoint is ready",
            "method": "Use POST to send base64 image data",
            "expectedFormat": {
                "image": "base64_string_here",
                "mimeType": "image/jpeg",
            },
        }

    @app.post("/api/analyze-food-base64")
    async def analyze_food(
        payload: AnalyzeFoodRequest, request: Request
    ) -> dict[str, object]:
        """Estimate nutrition for a base64 food photo."""
        state_container: AppContainer = request.app.state.container
        service = state_container.analysis_service
        if service is None:
            raise ServiceUnavailable(
                "AI service not available - API key missing or invalid"
            )
        if not payload.image:
            raise ValidationError("No image data provided")

        try:
            estimate = await service.analyze(payload.image, payload.mime_type)
        except FoodInsightError:
            raise
        except Exception as exc:
            logger.exception("Food analysis failed")
            raise InternalError(f"AI analysis failed: {exc}") from exc
        logger.info(
            "Food analyzed: name=%s calories=%s confidence=%s",
            estimate.food_name,
            estimate.calories,
            estimate.confidence,
        )
        return {
            "success": True,
            "data": estimate_payload(estimate),
            "timestamp": timestamp(),
        }

    @app.post("/api/user/profile")
    async def user_profile(payload: ProfileRequest) -> dict[str, object]:
        """Compute calorie and macro targets for a user profile."""
        try:
            profile = compute_profile(
                goal=payload.goal,
                age=payload.age,
                gender=payload.gender,
                height_cm=payload.height,
                weight_kg=payload.weight,
                activity_level=payload.activity_level,
            )
        except FoodInsightError:
            raise
        except Exception as exc:
            logger.exception("Profile calculation failed")
            raise InternalError(f"Failed to calculate user profile: {exc}") from exc
        logger.info(
            "Profile calculated: goal=%s target=%s",
            profile.goal,
            profile.daily_calorie_target,
        )
        return {
            "success": True,
            "data": profile_payload(profile, created_at=timestamp()),
            "message": profile.message,
        }

    @app.post("/api/user/dashboard")
    async def user_dashboard(payload: DashboardRequest) -> dict[str, object]:
        """Summarize today's meals against the profile targets."""
        try:
            snapshot = compute_dashboard(
                payload.user_profile.to_domain() if payload.user_profile else None,
                [meal.to_domain() for meal in payload.todays_meals],
            )
        except FoodInsightError:
            raise
        except Exception as exc:
            logger.exception("Dashboard calculation failed")
            raise InternalError(f"Failed to calculate dashboard data: {exc}") from exc
        return {
            "success": True,
            "data": dashboard_payload(snapshot, last_updated=timestamp()),
        }

    @app.post("/api/calculate-target")
    async def calculate_target(payload: QuickTargetRequest) -> dict[str, object]:
        """Quick calorie target from the simplified heuristic."""
        try:
            target = quick_target(
                goal=payload.goal,
                age=payload.age,
                gender=payload.gender,
                activity_level=payload.activity_level,
            )
        except Exception as exc:
            logger.warning("Target calculation failed: %s", exc)
            raise InternalError(f"Calculation failed: {exc}") from exc
        return {"success": True, "data": quick_target_payload(target)}

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )
