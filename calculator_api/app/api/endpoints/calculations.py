"""
Calculation endpoints.

These routes expose create, list, read and delete operations for
calculation records.  Each handler catches the service errors it can
anticipate and translates them into the standard envelope:

* ``ValidationError`` → 400
* ``NotFound`` → 404 ``"Calculation not found"``
* ``StorageError`` → 500 with an operation‑specific message and the
  underlying error text

Anything else propagates to the catch‑all middleware installed by
``create_app``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from calculator_api.app.core.config import Settings
from calculator_api.app.core.errors import NotFound, StorageError, ValidationError
from calculator_api.app.schemas.calculation import (
    CalculationCreated,
    CalculationCreatedResponse,
    CalculationListResponse,
    CalculationResponse,
    ErrorResponse,
    parse_limit,
    parse_operands,
)
from calculator_api.app.services.calculation_service import CalculationRepository

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_repository(request: Request) -> CalculationRepository:
    return request.app.state.repository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_response(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    """Render the failure envelope."""
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def storage_failure(message: str, exc: StorageError) -> JSONResponse:
    logger.exception("%s: %s", message, exc.message)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, exc.message)


@router.post(
    "/add",
    response_model=CalculationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def add_calculation(
    payload: Any = Body(None),
    repository: CalculationRepository = Depends(get_repository),
):
    """Add two numbers and store the result.

    ``number1`` and ``number2`` may be sent as numbers or numeric
    strings.  A missing field and an unparseable value are reported
    with different messages.
    """
    try:
        operands = parse_operands(payload)
    except ValidationError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    try:
        calculation = await repository.create(operands.number1, operands.number2, operands.sum)
    except StorageError as exc:
        return storage_failure("Failed to save calculation", exc)

    return CalculationCreatedResponse(
        message="Calculation saved successfully",
        data=CalculationCreated(
            id=calculation.id,
            number1=calculation.number1,
            number2=calculation.number2,
            sum=calculation.sum,
            created_at=calculation.created_at,
        ),
    )


@router.get("", response_model=CalculationListResponse, responses=ERROR_RESPONSES)
async def list_calculations(
    limit: Optional[str] = Query(None, description="Maximum number of records to return"),
    repository: CalculationRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Return the most recent calculations, newest first.

    A missing or malformed ``limit`` falls back to the configured
    default instead of failing the request.
    """
    effective_limit = parse_limit(limit, settings.default_list_limit, settings.max_list_limit)
    try:
        calculations = await repository.list_recent(effective_limit)
    except StorageError as exc:
        return storage_failure("Failed to fetch calculations", exc)
    return CalculationListResponse(count=len(calculations), data=calculations)


@router.get(
    "/{calculation_id}",
    response_model=CalculationResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_calculation(
    calculation_id: str,
    repository: CalculationRepository = Depends(get_repository),
):
    """Retrieve a single calculation by id."""
    try:
        calculation = await repository.get_by_id(calculation_id)
    except NotFound as exc:
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)
    except StorageError as exc:
        return storage_failure("Failed to fetch calculation", exc)
    return CalculationResponse(data=calculation)


@router.delete(
    "/{calculation_id}",
    response_model=CalculationResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def delete_calculation(
    calculation_id: str,
    repository: CalculationRepository = Depends(get_repository),
):
    """Delete a calculation and return the removed record."""
    try:
        calculation = await repository.delete_by_id(calculation_id)
    except NotFound as exc:
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)
    except StorageError as exc:
        return storage_failure("Failed to delete calculation", exc)
    return CalculationResponse(message="Calculation deleted successfully", data=calculation)
