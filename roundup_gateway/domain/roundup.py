"""Round-up (spare change) calculation for spending transactions"""

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Any, Iterable, List, Mapping

from roundup_gateway.domain.exceptions import InvalidAmountError, InvalidTransactionDataError
from roundup_gateway.domain.models import (
    Category,
    ProcessedTransaction,
    RejectedInput,
    RoundUpBatchResult,
    Transaction,
)
from roundup_gateway.utils.money import CENT, quantize_cents, to_decimal

DEFAULT_UNIT = Decimal("1.00")

# Keys read into Transaction attributes; everything else rides along in extra_fields
CONSUMED_FIELDS = frozenset({"amount", "category", "date", "transaction_date", "merchant"})


def validate_amount(amount: Any) -> Decimal:
    """
    Parse a transaction amount and enforce currency precision.

    Raises:
        InvalidAmountError: Amount is not numeric, not positive, or has
            more than two fractional digits
    """
    try:
        value = to_decimal(amount)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(f"Invalid amount: {amount!r}") from e

    if value <= 0:
        raise InvalidAmountError(f"Amount must be positive: {amount!r}")

    try:
        cents = value.quantize(CENT)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Amount out of range: {amount!r}") from e

    if cents != value:
        raise InvalidAmountError(f"Amount has more than 2 decimal places: {amount!r}")

    return cents


def _validate_unit(unit: Any) -> Decimal:
    try:
        value = to_decimal(unit)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(f"Invalid round-up unit: {unit!r}") from e
    if value <= 0:
        raise InvalidAmountError(f"Round-up unit must be positive: {unit!r}")
    return value


def calculate_round_up(amount: Any, unit: Any = DEFAULT_UNIT) -> Decimal:
    """
    Spare change between an amount and the next multiple of ``unit``.

    An amount that is already a whole multiple still advances to the next one,
    so the round-up is never zero.

    Example:
        4.32 → 0.68, 5.00 → 1.00, 999.99 → 0.01
    """
    value = validate_amount(amount)
    step = _validate_unit(unit)

    ceiling = ((value / step).to_integral_value(rounding=ROUND_FLOOR) + 1) * step
    return quantize_cents(ceiling - value)


def _parse_date(raw: Any) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str) and raw.strip():
        try:
            return date.fromisoformat(raw.strip()[:10])
        except ValueError as e:
            raise InvalidTransactionDataError(f"Invalid date: {raw!r}") from e
    raise InvalidTransactionDataError(f"Missing or invalid date: {raw!r}")


def parse_transaction(record: Transaction | Mapping[str, Any]) -> Transaction:
    """
    Normalize a raw record from the transaction store into a Transaction.

    Keys other than amount, category, date and merchant (such as the
    store's own id) are kept in ``extra_fields`` so results can be matched
    back to their source records.

    Raises:
        InvalidAmountError: Amount fails validation
        InvalidTransactionDataError: Record shape or date is malformed
    """
    if isinstance(record, Transaction):
        return replace(
            record,
            amount=validate_amount(record.amount),
            category=Category.normalize(record.category),
            date=_parse_date(record.date),
        )

    if not isinstance(record, Mapping):
        raise InvalidTransactionDataError(f"Unsupported transaction record: {type(record).__name__}")

    if "amount" not in record:
        raise InvalidAmountError("Missing amount")
    amount = validate_amount(record["amount"])
    txn_date = _parse_date(record.get("date", record.get("transaction_date")))

    merchant = record.get("merchant")
    return Transaction(
        amount=amount,
        category=Category.normalize(record.get("category")),
        date=txn_date,
        merchant=str(merchant).strip() if merchant is not None else None,
        extra_fields={key: value for key, value in record.items() if key not in CONSUMED_FIELDS},
    )


def process_transaction_round_ups(
    records: Iterable[Transaction | Mapping[str, Any]],
    unit: Any = DEFAULT_UNIT,
) -> RoundUpBatchResult:
    """
    Compute round-ups for a batch of transactions.

    Requirements:
    - Each entry is handled independently, in input order
    - Malformed entries are skipped and reported, never abort the batch
    - Total is the sum of raw round-ups in input order, rounded once at the end
    """
    step = _validate_unit(unit)

    processed: List[ProcessedTransaction] = []
    rejected: List[RejectedInput] = []
    total = Decimal("0")

    for index, record in enumerate(records):
        try:
            txn = parse_transaction(record)
            round_up = calculate_round_up(txn.amount, step)
        except (InvalidAmountError, InvalidTransactionDataError) as e:
            rejected.append(RejectedInput(index=index, input=record, reason=str(e)))
            logging.warning(
                f"Skipping transaction: {e}",
                extra={"step": "round_up_batch", "index": index},
            )
            continue

        processed.append(
            ProcessedTransaction(
                amount=txn.amount,
                category=txn.category,
                date=txn.date,
                merchant=txn.merchant,
                round_up_amount=round_up,
                rounded_amount=txn.amount + round_up,
                extra_fields=dict(txn.extra_fields),
            )
        )
        total += round_up

    return RoundUpBatchResult(
        processed_count=len(processed),
        total_round_ups=quantize_cents(total),
        processed_transactions=processed,
        rejected=rejected,
    )
