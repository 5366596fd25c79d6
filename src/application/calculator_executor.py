from __future__ import annotations

import logging
import time

from pydantic import ValidationError

from calculators.registry import CalculatorRegistry
from domain.schemas import CalculatorRequest, CalculatorResponse
from finance.errors import InvalidInputError

logger = logging.getLogger(__name__)


def _validation_messages(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "args"
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return messages


class CalculatorExecutor:
    def __init__(self, registry: CalculatorRegistry):
        self._registry = registry

    def run(self, request: CalculatorRequest) -> CalculatorResponse:
        logger.info("CalculatorExecutor running request_id=%s calculator=%s", request.request_id, request.calculator)
        t = time.perf_counter()
        try:
            calculator = self._registry.get(request.calculator)
        except KeyError:
            logger.warning("CalculatorExecutor unknown calculator=%s", request.calculator)
            return self._failure(request, [f"Unknown calculator: {request.calculator}"])

        try:
            response = calculator.run(request)
        except ValidationError as exc:
            response = self._failure(request, _validation_messages(exc))
        except InvalidInputError as exc:
            response = self._failure(request, [str(exc)])
        except Exception as exc:
            logger.exception("CalculatorExecutor failed request_id=%s calculator=%s", request.request_id, request.calculator)
            response = self._failure(request, [str(exc) or exc.__class__.__name__])
        logger.info(
            "CalculatorExecutor finished calculator=%s in %.3fs ok=%s",
            request.calculator,
            time.perf_counter() - t,
            response.ok,
        )
        return response

    def run_many(self, requests: list[CalculatorRequest]) -> list[CalculatorResponse]:
        return [self.run(request) for request in requests]

    def _failure(self, request: CalculatorRequest, errors: list[str]) -> CalculatorResponse:
        return CalculatorResponse(
            request_id=request.request_id,
            calculator=request.calculator,
            ok=False,
            errors=errors,
        )
