from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from application.reducer import DuplicateGoalError
from calculators.registry import registry
from domain.schemas import (
    CalculatorRequest,
    CalculatorResponse,
    ChatMessage,
    ChatRequest,
    FinancialState,
    Goal,
    ProfileForm,
    parse_action,
)
from finance.errors import InvalidInputError
from interface.cli import Services, build_services


def _error_details(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Rejected inputs may be NaN or infinity, which JSON responses cannot carry.
    return [{key: value for key, value in error.items() if key not in ("input", "ctx", "url")} for error in errors]


def create_app(services: Services | None = None) -> FastAPI:
    services = services or build_services()
    store = services.store
    app = FastAPI(title="WealthWise API")
    app.state.services = services

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(_error_details(exc.errors()))})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/state", response_model=FinancialState)
    def get_state() -> FinancialState:
        return store.state

    @app.post("/state/actions", response_model=FinancialState)
    def dispatch_action(payload: Dict[str, Any] = Body(...)) -> FinancialState:
        try:
            action = parse_action(payload)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=_error_details(exc.errors())) from exc
        try:
            return store.dispatch(action)
        except DuplicateGoalError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except InvalidInputError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    @app.put("/profile", response_model=FinancialState)
    def save_profile(form: ProfileForm) -> FinancialState:
        try:
            return store.save_profile(form)
        except InvalidInputError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    @app.post("/goals", response_model=FinancialState)
    def add_goal(goal: Goal) -> FinancialState:
        if store.state.profile is None:
            raise HTTPException(status_code=409, detail="Complete your profile before adding goals")
        try:
            return store.add_goal(goal)
        except DuplicateGoalError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.put("/goals/{goal_id}", response_model=FinancialState)
    def update_goal(goal_id: str, goal: Goal) -> FinancialState:
        # Unknown ids leave the state untouched.
        return store.update_goal(goal.model_copy(update={"id": goal_id}))

    @app.get("/chat", response_model=List[ChatMessage])
    def chat_history() -> List[ChatMessage]:
        return store.state.chat_history

    @app.post("/chat", response_model=ChatMessage)
    def send_chat(request: ChatRequest) -> ChatMessage:
        try:
            return services.chat.send(request.message)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    @app.get("/calculators")
    def list_calculators() -> list[dict[str, Any]]:
        return [spec.__dict__ for spec in registry.list_specs()]

    @app.post("/calculators/{name}", response_model=CalculatorResponse)
    def run_calculator(name: str, args: Optional[Dict[str, Any]] = Body(default=None)) -> CalculatorResponse:
        return services.calculators.run(CalculatorRequest(calculator=name, args=args or {}))

    return app


app = create_app()
