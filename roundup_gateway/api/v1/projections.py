"""POST /v1/projections - compound growth projections"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from roundup_gateway.api.v1.schemas import (
    CheckpointSchema,
    CurrentProfileSchema,
    CustomProjectionRequest,
    CustomProjectionResponse,
    ProfileProjectionSchema,
    ProjectionRequest,
    ProjectionResponse,
)
from roundup_gateway.api.dependencies import get_request_id
from roundup_gateway.config import settings
from roundup_gateway.domain.exceptions import InvalidProjectionInputError, UnknownRiskProfileError
from roundup_gateway.domain.models import ProjectionResult
from roundup_gateway.domain.projections import compare_profiles, project_checkpoints, project_custom
from roundup_gateway.infrastructure.observability.logging import log_projection
from roundup_gateway.infrastructure.observability.metrics import record_projection

router = APIRouter()


def _checkpoints(result: ProjectionResult) -> CheckpointSchema:
    return CheckpointSchema(
        one_year=result.one_year,
        three_years=result.three_years,
        five_years=result.five_years,
        ten_years=result.ten_years,
    )


@router.post("/projections", response_model=ProjectionResponse)
def get_projections(request_body: ProjectionRequest, request_id: str = Depends(get_request_id)):
    """
    Project the user's balance under their risk profile at 1, 3, 5 and 10 years,
    alongside the same projection under every profile for comparison.
    """
    start_time = time.time()
    profile_name = request_body.risk_profile or settings.default_risk_profile

    try:
        current = project_checkpoints(
            request_body.current_balance,
            request_body.monthly_contribution,
            profile_name,
        )
        comparison = compare_profiles(request_body.current_balance, request_body.monthly_contribution)
    except (InvalidProjectionInputError, UnknownRiskProfileError) as e:
        logging.warning(f"Invalid projection input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_projection("checkpoints")
    log_projection(request_id, "checkpoints", str(current.annual_rate), (time.time() - start_time) * 1000)

    return ProjectionResponse(
        current_profile=CurrentProfileSchema(
            name=current.profile.value,
            annual_rate=current.annual_rate,
            current_balance=current.current_balance,
            monthly_contribution=current.monthly_contribution,
        ),
        projections=_checkpoints(current.projections),
        comparison_profiles=[
            ProfileProjectionSchema(
                name=p.profile.value,
                annual_rate=p.annual_rate,
                description=p.description,
                projections=_checkpoints(p.projections),
            )
            for p in comparison
        ],
    )


@router.post("/projections/custom", response_model=CustomProjectionResponse)
def get_custom_projection(request_body: CustomProjectionRequest, request_id: str = Depends(get_request_id)):
    """What-if projection with explicit rate and horizon; nothing is stored"""
    start_time = time.time()

    try:
        result = project_custom(
            request_body.current_balance,
            request_body.monthly_contribution,
            request_body.annual_rate,
            request_body.horizon_years,
            max_rate=settings.max_annual_return_rate,
            max_horizon_years=settings.max_horizon_years,
        )
    except InvalidProjectionInputError as e:
        logging.warning(f"Invalid projection input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_projection("custom")
    log_projection(request_id, "custom", str(result.annual_rate), (time.time() - start_time) * 1000)

    return CustomProjectionResponse(
        horizon_years=result.horizon_years,
        months=result.months,
        current_balance=result.current_balance,
        monthly_contribution=result.monthly_contribution,
        annual_rate=result.annual_rate,
        future_value=result.future_value,
        total_contributions=result.total_contributions,
        total_growth=result.total_growth,
        growth_percentage=result.growth_percentage,
        from_current_balance=result.from_current_balance,
        from_contributions=result.from_contributions,
    )
