"""Request pipeline run in front of every product handler.

The pipeline is an ordered list of stages. Each stage inspects the
request context and either returns None to continue or a ``Failure`` to
halt. Once a stage halts, no later stage and no handler runs.

Stage order is fixed:

    log_request -> require_api_key (mutating routes) -> validate_body (create/update) -> handler
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from stockroom.core.config import Settings
from stockroom.core.errors import Failure
from stockroom.core.logging import get_logger
from stockroom.domain.entities.field_spec import FieldSpec
from stockroom.domain.entities.product import PRODUCT_FIELDS, Record
from stockroom.domain.services.query_engine import PageMetadata
from stockroom.domain.services.record_validator import RecordValidator
from stockroom.infrastructure.auth import authenticate_api_key

logger = get_logger(__name__)


@dataclass
class RequestContext:
    """Everything the stages and the handler know about one request.

    Header names are lower-cased. ``validated`` is filled in by the
    validation stage with the normalized request body.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    validated: Record | None = None
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class HandlerResult:
    """Successful handler output, rendered into the success envelope."""

    data: Any
    status_code: int = 200
    pagination: PageMetadata | None = None
    message: str | None = None


Stage = Callable[[RequestContext], Failure | None]
Handler = Callable[[RequestContext], HandlerResult | Failure]


class ChainState(str, Enum):
    """Lifecycle of one chain run."""

    PENDING = "pending"
    RUNNING = "running"
    HALTED = "halted"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ChainOutcome:
    """Terminal state of a chain run.

    ``halted_at`` is the index of the stage that halted, or the number of
    stages when the handler itself returned a failure.
    """

    state: ChainState
    result: HandlerResult | None = None
    failure: Failure | None = None
    halted_at: int | None = None


class MiddlewareChain:
    """Runs stages in order, then the handler, stopping at the first failure."""

    def __init__(self, stages: Sequence[Stage], expose_errors: bool = False) -> None:
        """Initialize the chain.

        Args:
            stages: Stages in execution order.
            expose_errors: Report the text of unexpected exceptions instead
                of the generic internal error message.
        """
        self.stages = tuple(stages)
        self.expose_errors = expose_errors
        self.state = ChainState.PENDING

    def run(self, context: RequestContext, handler: Handler) -> ChainOutcome:
        """Drive the request through every stage and the handler."""
        self.state = ChainState.RUNNING

        for index, stage in enumerate(self.stages):
            failure = self._call(stage, context)
            if failure is not None:
                return self._halt(failure, index)

        result = self._call(handler, context)
        if isinstance(result, Failure):
            return self._halt(result, len(self.stages))

        self.state = ChainState.COMPLETED
        return ChainOutcome(state=ChainState.COMPLETED, result=result)

    def _call(self, step: Callable[[RequestContext], Any], context: RequestContext) -> Any:
        try:
            return step(context)
        except Exception as e:
            logger.error(
                "Unhandled exception in request pipeline",
                method=context.method,
                path=context.path,
                step=getattr(step, "__name__", type(step).__name__),
                error=str(e),
                exc_type=type(e).__name__,
            )
            return Failure.internal(str(e) if self.expose_errors else Failure.internal().message)

    def _halt(self, failure: Failure, index: int) -> ChainOutcome:
        self.state = ChainState.HALTED
        return ChainOutcome(state=ChainState.HALTED, failure=failure, halted_at=index)


def log_request(context: RequestContext) -> Failure | None:
    """Log method, path and arrival time. Never halts."""
    logger.info(
        "Request received",
        method=context.method,
        path=context.path,
        timestamp=context.received_at.isoformat(),
    )
    return None


def require_api_key(header_name: str, expected: str | None) -> Stage:
    """Build a stage that halts unless the request carries the configured key."""
    header_name = header_name.lower()

    def check_api_key(context: RequestContext) -> Failure | None:
        return authenticate_api_key(context.headers.get(header_name), expected)

    return check_api_key


def validate_body(schema: Sequence[FieldSpec], partial: bool = False) -> Stage:
    """Build a stage that validates and normalizes the request body.

    Args:
        schema: Field specifications for the body.
        partial: Only validate fields present in the body (updates).
    """

    def check_body(context: RequestContext) -> Failure | None:
        result = RecordValidator.validate(context.body, schema, partial=partial)
        if not result.ok:
            return result.to_failure()
        context.validated = result.record
        return None

    return check_body


class RouteKind(str, Enum):
    """Product routes, each with its own set of stages."""

    LIST = "list"
    STATS = "stats"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_mutating(self) -> bool:
        return self in (RouteKind.CREATE, RouteKind.UPDATE, RouteKind.DELETE)

    @property
    def validates_body(self) -> bool:
        return self in (RouteKind.CREATE, RouteKind.UPDATE)


def build_chain(
    kind: RouteKind,
    settings: Settings,
    schema: Sequence[FieldSpec] = PRODUCT_FIELDS,
) -> MiddlewareChain:
    """Assemble the stages for a route.

    Args:
        kind: The route being served.
        settings: Application settings (API key and header name, debug flag).
        schema: Field specifications used by the validation stage.
    """
    stages: list[Stage] = [log_request]
    if kind.is_mutating:
        stages.append(require_api_key(settings.api_key_header, settings.api_key))
    if kind.validates_body:
        stages.append(validate_body(schema, partial=kind == RouteKind.UPDATE))
    return MiddlewareChain(stages, expose_errors=settings.debug)
