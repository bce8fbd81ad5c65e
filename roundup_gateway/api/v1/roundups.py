"""POST /v1/roundups - spare-change calculation endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from roundup_gateway.api.v1.schemas import (
    ProcessedTransactionSchema,
    RejectedInputSchema,
    RoundUpBatchRequest,
    RoundUpBatchResponse,
    RoundUpRequest,
    RoundUpResponse,
)
from roundup_gateway.api.dependencies import get_request_id
from roundup_gateway.config import settings
from roundup_gateway.domain.exceptions import InvalidAmountError
from roundup_gateway.domain.roundup import calculate_round_up, process_transaction_round_ups, validate_amount
from roundup_gateway.infrastructure.observability.logging import log_round_up_batch
from roundup_gateway.infrastructure.observability.metrics import record_round_up_batch

router = APIRouter()


@router.post("/roundups/calculate", response_model=RoundUpResponse)
def calculate(request_body: RoundUpRequest, request_id: str = Depends(get_request_id)):
    """Round-up for a single transaction amount"""
    try:
        amount = validate_amount(request_body.amount)
        round_up = calculate_round_up(amount, settings.round_up_unit)
    except InvalidAmountError as e:
        logging.warning(f"Invalid amount: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return RoundUpResponse(amount=amount, round_up_amount=round_up, rounded_amount=amount + round_up)


@router.post("/roundups", response_model=RoundUpBatchResponse)
def process_batch(request_body: RoundUpBatchRequest, request_id: str = Depends(get_request_id)):
    """
    Compute round-ups for a batch of transaction records.

    Flow:
    1. Validate and round up each record independently
    2. Report rejected records alongside the processed ones
    3. Record metrics and log the batch outcome
    """
    start_time = time.time()

    result = process_transaction_round_ups(request_body.transactions, settings.round_up_unit)

    duration_ms = (time.time() - start_time) * 1000
    record_round_up_batch(result.processed_count, len(result.rejected), result.total_round_ups)
    log_round_up_batch(
        request_id,
        result.processed_count,
        len(result.rejected),
        str(result.total_round_ups),
        duration_ms,
    )

    return RoundUpBatchResponse(
        processed_count=result.processed_count,
        total_round_ups=result.total_round_ups,
        processed_transactions=[
            ProcessedTransactionSchema.model_validate(
                {
                    **txn.extra_fields,
                    "amount": txn.amount,
                    "category": txn.category.value,
                    "date": txn.date,
                    "merchant": txn.merchant,
                    "round_up_amount": txn.round_up_amount,
                    "rounded_amount": txn.rounded_amount,
                }
            )
            for txn in result.processed_transactions
        ],
        rejected=[
            RejectedInputSchema(index=r.index, input=r.input, reason=r.reason)
            for r in result.rejected
        ],
    )
