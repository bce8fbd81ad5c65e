"""POST /v1/goals - savings goal tracking"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from roundup_gateway.api.v1.schemas import (
    GoalProgressSchema,
    GoalsRequest,
    GoalsResponse,
    GoalTimelineRequest,
    GoalTimelineResponse,
)
from roundup_gateway.api.dependencies import get_request_id
from roundup_gateway.config import settings
from roundup_gateway.domain.exceptions import InvalidProjectionInputError, UnknownRiskProfileError
from roundup_gateway.domain.profiles import annual_rate_for
from roundup_gateway.domain.projections import months_to_goal, track_goals
from roundup_gateway.infrastructure.observability.metrics import record_projection

router = APIRouter()


@router.post("/goals", response_model=GoalsResponse)
def get_goals(request_body: GoalsRequest, request_id: str = Depends(get_request_id)):
    """Progress toward the standard savings goals"""
    try:
        goals = track_goals(request_body.current_balance, request_body.monthly_contribution)
    except InvalidProjectionInputError as e:
        logging.warning(f"Invalid goal input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_projection("goals")
    return GoalsResponse(
        current_balance=request_body.current_balance,
        monthly_contribution=request_body.monthly_contribution,
        goals=[
            GoalProgressSchema(
                name=g.name,
                amount=g.amount,
                remaining_amount=g.remaining_amount,
                progress_percentage=g.progress_percentage,
                months_to_reach=g.months_to_reach,
                achieved=g.achieved,
            )
            for g in goals
        ],
    )


@router.post("/goals/timeline", response_model=GoalTimelineResponse)
def get_goal_timeline(request_body: GoalTimelineRequest, request_id: str = Depends(get_request_id)):
    """
    Months needed to reach a target under the given risk profile.

    Returns:
        Timeline with months_to_reach null when the target is unreachable
    """
    try:
        rate = annual_rate_for(request_body.risk_profile or settings.default_risk_profile)
        timeline = months_to_goal(
            request_body.current_balance,
            request_body.monthly_contribution,
            request_body.target_amount,
            rate,
            include_interest=request_body.include_interest,
            max_months=settings.goal_max_months,
        )
    except (InvalidProjectionInputError, UnknownRiskProfileError) as e:
        logging.warning(f"Invalid goal input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_projection("goal_timeline")
    return GoalTimelineResponse(
        target_amount=timeline.target_amount,
        current_balance=timeline.current_balance,
        remaining_amount=timeline.remaining_amount,
        monthly_contribution=timeline.monthly_contribution,
        achieved=timeline.achieved,
        months_to_reach=timeline.months_to_reach,
        years_to_reach=timeline.years_to_reach,
        include_interest=timeline.include_interest,
        annual_rate=timeline.annual_rate,
    )
