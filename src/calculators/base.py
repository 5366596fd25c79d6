from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from domain.schemas import CalculatorRequest, CalculatorResponse


@dataclass(frozen=True)
class CalculatorSpec:
    name: str
    description: str
    args_schema: dict[str, Any]


class CalculatorArgs(BaseModel):
    """Base for calculator arguments; NaN and infinity are rejected at the boundary."""

    model_config = ConfigDict(allow_inf_nan=False)


class Calculator(ABC):
    name: str
    description: str = ""
    args_model: type[BaseModel]

    def run(self, request: CalculatorRequest) -> CalculatorResponse:
        args = self.args_model.model_validate(request.args)
        return CalculatorResponse(
            request_id=request.request_id,
            calculator=self.name,
            result=self.compute(args),
        )

    @abstractmethod
    def compute(self, args: Any) -> dict[str, Any]:
        raise NotImplementedError

    def spec(self) -> CalculatorSpec:
        return CalculatorSpec(
            name=self.name,
            description=self.description,
            args_schema=self.args_model.model_json_schema(),
        )
