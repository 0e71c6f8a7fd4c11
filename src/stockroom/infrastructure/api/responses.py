"""Rendering of handler results and failures into HTTP responses.

This is the only place where a ``Failure`` kind becomes a status code.
"""

from fastapi.responses import JSONResponse

from stockroom.core.errors import Failure
from stockroom.infrastructure.api.middleware import ChainOutcome, HandlerResult
from stockroom.infrastructure.api.schemas import (
    FailureResponse,
    PaginationSchema,
    SuccessResponse,
)


def success_response(result: HandlerResult) -> JSONResponse:
    """Render a handler result into the success envelope."""
    envelope = SuccessResponse(
        data=result.data,
        message=result.message,
        pagination=(
            PaginationSchema.from_metadata(result.pagination)
            if result.pagination is not None
            else None
        ),
    )
    return JSONResponse(status_code=result.status_code, content=envelope.to_content())


def failure_response(failure: Failure) -> JSONResponse:
    """Render a failure into the failure envelope with its status code."""
    envelope = FailureResponse(error=failure.message)
    return JSONResponse(status_code=failure.status_code, content=envelope.model_dump())


def render_outcome(outcome: ChainOutcome) -> JSONResponse:
    """Render the terminal state of a pipeline run."""
    if outcome.failure is not None:
        return failure_response(outcome.failure)
    if outcome.result is None:
        return failure_response(Failure.internal())
    return success_response(outcome.result)
