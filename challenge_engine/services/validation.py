from fastapi import HTTPException
from pydantic import BaseModel
from pydantic import ValidationError as RequestShapeError
from typing import Iterable, List, Optional, Union
from datetime import date, timedelta

from .. import config
from ..models.challenge import ChallengeCreate, ChallengeStatus, ChallengeAction
from ..models.metric import VALID_METRIC_TYPES
from ..utils.periods import parse_date
from .templates import get_template_by_id

# Maximum days in the future a challenge can start
MAX_FUTURE_START_DAYS = config.MAX_FUTURE_START_DAYS
MAX_CHALLENGE_DURATION_DAYS = config.MAX_CHALLENGE_DURATION_DAYS
# Same start and end day is one day; shorter ranges are caught as INVALID_RANGE
MIN_CHALLENGE_DURATION_DAYS = config.MIN_CHALLENGE_DURATION_DAYS
MAX_MESSAGE_LENGTH = config.MAX_MESSAGE_LENGTH

VALID_ACTIONS = [action.value for action in ChallengeAction]


class ValidationError(BaseModel):
    field: str
    message: str
    code: str

class ValidationResult(BaseModel):
    valid: bool
    errors: List[ValidationError] = []


def _result(errors: List[ValidationError]) -> ValidationResult:
    return ValidationResult(valid=len(errors) == 0, errors=errors)


def _parse_period_date(value: str, field: str, errors: List[ValidationError]) -> Optional[date]:
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        errors.append(ValidationError(
            field=field,
            message="Date must be in YYYY-MM-DD format",
            code="INVALID_DATE"
        ))
        return None


def _type_errors(exc: RequestShapeError) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for detail in exc.errors():
        field = ".".join(str(part) for part in detail["loc"]) or "request"
        errors.append(ValidationError(field=field, message=f"{field} must be text", code="INVALID_TYPE"))
    return errors


def validate_create_challenge(
    data: Union[ChallengeCreate, dict],
    challenger_id: str,
    today: Optional[date] = None
) -> ValidationResult:
    if isinstance(data, dict):
        try:
            data = ChallengeCreate.model_validate(data)
        except RequestShapeError as exc:
            return _result(_type_errors(exc))
    today = today or date.today()
    errors: List[ValidationError] = []

    if not data.target_id:
        errors.append(ValidationError(field="target_id", message="Target user is required", code="REQUIRED"))
    elif data.target_id == challenger_id:
        errors.append(ValidationError(field="target_id", message="You cannot challenge yourself", code="SELF_CHALLENGE"))

    if not data.period_start:
        errors.append(ValidationError(field="period_start", message="Start date is required", code="REQUIRED"))
    if not data.period_end:
        errors.append(ValidationError(field="period_end", message="End date is required", code="REQUIRED"))

    if data.period_start and data.period_end:
        start = _parse_period_date(data.period_start, "period_start", errors)
        end = _parse_period_date(data.period_end, "period_end", errors)

        if start is not None and end is not None:
            if start > today + timedelta(days=MAX_FUTURE_START_DAYS):
                errors.append(ValidationError(
                    field="period_start",
                    message=f"Start date cannot be more than {MAX_FUTURE_START_DAYS} days in the future",
                    code="TOO_FAR_FUTURE"
                ))

            if end < start:
                errors.append(ValidationError(
                    field="period_end",
                    message="End date must be on or after start date",
                    code="INVALID_RANGE"
                ))

            duration_days = (end - start).days + 1
            if duration_days > MAX_CHALLENGE_DURATION_DAYS:
                errors.append(ValidationError(
                    field="period_end",
                    message=f"Challenge cannot be longer than {MAX_CHALLENGE_DURATION_DAYS} days",
                    code="TOO_LONG"
                ))

    if data.metric_type and data.metric_type not in VALID_METRIC_TYPES:
        errors.append(ValidationError(
            field="metric_type",
            message=f"Invalid metric type. Must be one of: {', '.join(VALID_METRIC_TYPES)}",
            code="INVALID_METRIC"
        ))

    if data.message and len(data.message) > MAX_MESSAGE_LENGTH:
        errors.append(ValidationError(
            field="message",
            message=f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters",
            code="TOO_LONG"
        ))

    if data.template_id and get_template_by_id(data.template_id) is None:
        errors.append(ValidationError(field="template_id", message="Invalid challenge template", code="INVALID_TEMPLATE"))

    return _result(errors)


def can_create_challenge_with(existing_status: Optional[Union[ChallengeStatus, str]]) -> ValidationResult:
    """Classify the status of an existing challenge between the same two users.

    Looking that challenge up is the caller's job.
    """
    errors: List[ValidationError] = []

    if existing_status == ChallengeStatus.PENDING:
        errors.append(ValidationError(
            field="target_id",
            message="You already have a pending challenge with this user",
            code="DUPLICATE_PENDING"
        ))
    elif existing_status == ChallengeStatus.ACCEPTED:
        errors.append(ValidationError(
            field="target_id",
            message="You already have an active challenge with this user",
            code="DUPLICATE_ACTIVE"
        ))

    return _result(errors)


def validate_challenge_action(
    action: str,
    current_status: Union[ChallengeStatus, str],
    user_id: str,
    challenger_id: str,
    target_id: str
) -> ValidationResult:
    errors: List[ValidationError] = []

    if action not in VALID_ACTIONS:
        errors.append(ValidationError(field="action", message="Invalid action", code="INVALID_ACTION"))
        return _result(errors)

    is_challenger = user_id == challenger_id
    is_target = user_id == target_id

    if not is_challenger and not is_target:
        errors.append(ValidationError(field="user", message="You are not part of this challenge", code="NOT_AUTHORIZED"))
        return _result(errors)

    action = ChallengeAction(action)
    status_label = current_status.value if isinstance(current_status, ChallengeStatus) else current_status

    if action in (ChallengeAction.ACCEPT, ChallengeAction.DECLINE):
        if not is_target:
            errors.append(ValidationError(
                field="action",
                message="Only the challenged user can accept or decline",
                code="NOT_TARGET"
            ))
        if current_status != ChallengeStatus.PENDING:
            errors.append(ValidationError(
                field="status",
                message=f"Cannot {action.value} a challenge that is {status_label}",
                code="INVALID_STATUS"
            ))
    elif current_status not in (ChallengeStatus.PENDING, ChallengeStatus.ACCEPTED):
        errors.append(ValidationError(
            field="status",
            message=f"Cannot cancel a challenge that is {status_label}",
            code="INVALID_STATUS"
        ))

    return _result(errors)


def format_validation_errors(errors: Iterable[ValidationError]) -> str:
    return "; ".join(error.message for error in errors)


def raise_for_validation(result: ValidationResult, status_code: int = 400) -> None:
    """Turn a failed validation into an HTTP error for API routes."""
    if result.valid:
        return
    raise HTTPException(
        status_code=status_code,
        detail={
            "message": format_validation_errors(result.errors),
            "errors": [error.model_dump() for error in result.errors],
        }
    )
