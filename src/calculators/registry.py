from __future__ import annotations

from calculators.base import Calculator, CalculatorSpec


class CalculatorRegistry:
    def __init__(self):
        self._calculators: dict[str, Calculator] = {}

    def register(self, calculator: Calculator) -> None:
        self._calculators[calculator.name] = calculator

    def get(self, name: str) -> Calculator:
        if name not in self._calculators:
            raise KeyError(f"Calculator not registered: {name}")
        return self._calculators[name]

    def names(self) -> list[str]:
        return sorted(self._calculators)

    def list_specs(self) -> list[CalculatorSpec]:
        return [self._calculators[name].spec() for name in self.names()]



registry = CalculatorRegistry()


def register_calculator(calculator_cls: type[Calculator]) -> type[Calculator]:
    registry.register(calculator_cls())
    return calculator_cls
