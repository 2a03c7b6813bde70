"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.models import (
    CompleteMealRequest,
    MacrosRequest,
    MealDraftRequest,
    ProfilePayload,
    ReadinessRequest,
    ScoreRequest,
    TotalsRequest,
)
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import (
    FoodItemNotFound,
    InvalidArgument,
    InvalidProfile,
    MealIncomplete,
    MealNotFound,
    NutritionEngineError,
    ProfileNotFound,
)
from meal_planner.domain.stats import NutritionLogEntry
from meal_planner.services.meals import MealValidation, is_meal_ready_to_validate
from meal_planner.services.meals import required_calories as meal_required_calories
from meal_planner.services.nutrition_log import score_entry
from meal_planner.services.scoring import badge_for_score, score
from meal_planner.services.stats import PeriodSummary, totals_for_window
from meal_planner.services.targets import macros_for_calories, targets_for_profile

_UNPROCESSABLE = 422

_STATUS_BY_ERROR: dict[type[NutritionEngineError], int] = {
    InvalidProfile: _UNPROCESSABLE,
    InvalidArgument: _UNPROCESSABLE,
    MealIncomplete: status.HTTP_409_CONFLICT,
    ProfileNotFound: status.HTTP_404_NOT_FOUND,
    FoodItemNotFound: status.HTTP_404_NOT_FOUND,
    MealNotFound: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(NutritionEngineError)
    async def engine_error_handler(
        request: Request, exc: NutritionEngineError
    ) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.warning(
            "Request rejected: %s %s -> %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc,
        )
        content: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
        if isinstance(exc, MealIncomplete):
            content["accumulated_calories"] = exc.accumulated_calories
            content["required_calories"] = exc.required_calories
        return JSONResponse(status_code=status_code, content=content)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/targets")
    async def compute_targets(payload: ProfilePayload) -> dict[str, object]:
        """Compute daily and per-meal targets for a profile."""
        return asdict(targets_for_profile(payload.to_domain()))

    @app.post("/macros")
    async def compute_macros(payload: MacrosRequest) -> dict[str, object]:
        """Split a calorie value into macro targets."""
        return asdict(macros_for_calories(payload.calories))

    @app.post("/totals")
    async def compute_totals(
        payload: TotalsRequest, request: Request
    ) -> dict[str, object]:
        """Aggregate completed meals into per-day totals."""
        state_container: AppContainer = request.app.state.container
        _check_window(state_container, payload.window_days)
        daily = totals_for_window(
            [meal.to_domain() for meal in payload.meals],
            payload.reference_date,
            payload.window_days,
        )
        return {"daily": [asdict(entry) for entry in daily]}

    @app.post("/score")
    async def compute_score(payload: ScoreRequest) -> dict[str, object]:
        """Score a day's intake against a calorie target."""
        value = score(payload.total_calories, payload.target_calories)
        return {"score": value, "badge": badge_for_score(value).value}

    @app.post("/meals/readiness")
    async def meal_readiness(payload: ReadinessRequest) -> dict[str, object]:
        """Return whether a meal has enough calories to be validated."""
        return {
            "ready": is_meal_ready_to_validate(
                payload.accumulated_calories, payload.calories_per_meal_target
            ),
            "required_calories": meal_required_calories(
                payload.calories_per_meal_target
            ),
        }

    @app.get("/users/{user_id}/targets")
    async def user_targets(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the user's current targets."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.profile_service.get_targets(user_id))

    @app.put("/users/{user_id}/profile")
    async def update_profile(
        user_id: UUID, payload: ProfilePayload, request: Request
    ) -> dict[str, object]:
        """Save the user's profile and return the recomputed targets."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.profile_service.update_profile(
            user_id, payload.to_domain()
        )
        return asdict(targets)

    @app.get("/users/{user_id}/summary")
    async def user_summary(
        user_id: UUID,
        request: Request,
        days: int | None = None,
        today: date | None = None,
        timezone: str | None = None,
    ) -> dict[str, object]:
        """Return daily totals, scores and averages for recent days."""
        state_container: AppContainer = request.app.state.container
        window = days or state_container.settings.summary_window_days
        _check_window(state_container, window)
        summary = state_container.stats_service.get_summary(
            user_id, window, today=today, timezone_name=timezone
        )
        return _format_summary(summary)

    @app.get("/users/{user_id}/nutrition-logs")
    async def nutrition_logs(
        user_id: UUID, request: Request, days: int = 7, today: date | None = None
    ) -> dict[str, object]:
        """Return stored daily logs with their scores."""
        state_container: AppContainer = request.app.state.container
        _check_window(state_container, days)
        end = today or datetime.now(tz=UTC).date()
        entries = state_container.nutrition_log_service.list_entries(
            user_id, end - timedelta(days=days - 1), end
        )
        return {"logs": [_format_log_entry(entry) for entry in entries]}

    @app.post("/users/{user_id}/meals/preview")
    async def preview_meal(
        user_id: UUID, payload: MealDraftRequest, request: Request
    ) -> dict[str, object]:
        """Return a meal draft's progress towards the per-meal target."""
        state_container: AppContainer = request.app.state.container
        progress = state_container.meal_service.preview_meal(
            user_id, [item.to_domain() for item in payload.ingredients]
        )
        return asdict(progress)

    @app.post("/users/{user_id}/meals/validate")
    async def validate_meal(
        user_id: UUID,
        payload: MealDraftRequest,
        request: Request,
        timezone: str | None = None,
    ) -> dict[str, object]:
        """Validate a meal draft and record it in today's log."""
        state_container: AppContainer = request.app.state.container
        result = state_container.meal_service.validate_meal(
            user_id,
            payload.name,
            [item.to_domain() for item in payload.ingredients],
            validated_at=payload.validated_at,
            timezone_name=timezone,
        )
        return _format_validation(result)

    @app.post("/users/{user_id}/meals/{meal_id}/complete")
    async def complete_meal(
        user_id: UUID,
        meal_id: UUID,
        request: Request,
        payload: CompleteMealRequest | None = None,
        timezone: str | None = None,
    ) -> dict[str, object]:
        """Record another completion of a meal."""
        state_container: AppContainer = request.app.state.container
        result = state_container.meal_service.complete_meal(
            user_id,
            meal_id,
            payload.completed_at if payload else None,
            timezone_name=timezone,
        )
        return _format_validation(result)

    return app


def _check_window(state_container: AppContainer, days: int) -> None:
    if days <= 0 or days > state_container.settings.max_window_days:
        raise InvalidArgument(
            f"days must be between 1 and {state_container.settings.max_window_days}"
        )


def _format_log_entry(entry: NutritionLogEntry) -> dict[str, object]:
    value = score_entry(entry) if entry.target_calories > 0 else 0
    return {
        **asdict(entry),
        "score": value,
        "badge": badge_for_score(value).value,
    }


def _format_summary(summary: PeriodSummary) -> dict[str, object]:
    return {**asdict(summary), "badge": summary.badge}


def _format_validation(result: MealValidation) -> dict[str, object]:
    return {
        "meal": {**asdict(result.meal), "completed": result.meal.completed},
        "log": _format_log_entry(result.log_entry),
    }
