from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

DEDUCTION_CODES = ("80C", "80D", "HRA", "NPS")


def new_id() -> str:
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _default_deductions() -> Dict[str, float]:
    return {code: 0.0 for code in DEDUCTION_CODES}


class Goal(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    amount: float = Field(ge=0, description="Target amount in currency units.")
    timeline: float = Field(gt=0, description="Years until the target date; fractions allowed (e.g. 0.5).")
    priority: Literal["high", "medium", "low"] = "medium"
    progress: float = Field(default=0, ge=0, le=100)


class ProfileForm(BaseModel):
    """Profile fields a user submits from the profile form (everything except goals)."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    income: float = Field(ge=0, description="Monthly income.")
    expenses: float = Field(ge=0, description="Monthly expenses.")
    debts: float = Field(default=0, ge=0)
    savings: float = Field(default=0, ge=0)
    risk_tolerance: Literal["low", "medium", "high"] = Field(default="medium", alias="riskTolerance")
    age: int = Field(default=25, ge=0, le=120)
    dependents: int = Field(default=0, ge=0)
    tax_regime: Literal["old", "new"] = Field(default="new", alias="taxRegime")
    deductions: Dict[str, float] = Field(default_factory=_default_deductions)

    @field_validator("deductions")
    @classmethod
    def fill_deductions(cls, value: Dict[str, float]) -> Dict[str, float]:
        for code, amount in value.items():
            if amount < 0:
                raise ValueError(f"deduction {code!r} must be >= 0")
        merged = _default_deductions()
        merged.update(value)
        return merged


class Profile(ProfileForm):
    goals: List[Goal] = Field(default_factory=list)

    @field_validator("goals")
    @classmethod
    def unique_goal_ids(cls, value: List[Goal]) -> List[Goal]:
        ids = [goal.id for goal in value]
        if len(ids) != len(set(ids)):
            raise ValueError("goal ids must be unique")
        return value

    @classmethod
    def from_form(cls, form: ProfileForm, goals: List[Goal] | None = None) -> "Profile":
        return cls(**form.model_dump(), goals=list(goals or []))


class Budget(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    essentials: float = Field(ge=0)
    wants: float = Field(ge=0)
    savings: float = Field(ge=0)


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    text: str = Field(alias="message")
    sender: Literal["user", "ai"]
    timestamp: datetime = Field(default_factory=utc_now)


class FinancialState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: Optional[Profile] = None
    budget: Optional[Budget] = None
    chat_history: List[ChatMessage] = Field(default_factory=list, alias="chatHistory")

    def to_snapshot(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Debt(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    name: str
    principal: float = Field(ge=0, description="Outstanding balance.")
    rate: float = Field(ge=0, description="Annual interest rate in percent.")
    min_payment: float = Field(default=0, ge=0, alias="minPayment")
    type: str = "other"


# ---- store actions ----

class SetProfileAction(BaseModel):
    type: Literal["set_profile"] = "set_profile"
    payload: Profile


class SetBudgetAction(BaseModel):
    type: Literal["set_budget"] = "set_budget"
    payload: Budget


class AddGoalAction(BaseModel):
    type: Literal["add_goal"] = "add_goal"
    payload: Goal


class UpdateGoalAction(BaseModel):
    type: Literal["update_goal"] = "update_goal"
    payload: Goal


class AppendChatMessageAction(BaseModel):
    type: Literal["append_chat_message"] = "append_chat_message"
    payload: ChatMessage


class ReplaceStateAction(BaseModel):
    type: Literal["replace_state"] = "replace_state"
    payload: FinancialState


StoreAction = Annotated[
    Union[
        SetProfileAction,
        SetBudgetAction,
        AddGoalAction,
        UpdateGoalAction,
        AppendChatMessageAction,
        ReplaceStateAction,
    ],
    Field(discriminator="type"),
]

_STORE_ACTION_ADAPTER: TypeAdapter[Any] = TypeAdapter(StoreAction)


def parse_action(data: Dict[str, Any]) -> Any:
    return _STORE_ACTION_ADAPTER.validate_python(data)


# ---- calculators ----

class CalculatorRequest(BaseModel):
    request_id: str = Field(default_factory=new_id)
    calculator: str
    args: Dict[str, Any] = Field(default_factory=dict)


class CalculatorResponse(BaseModel):
    request_id: str
    calculator: str
    ok: bool = True
    result: Dict[str, Any] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
