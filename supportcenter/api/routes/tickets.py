from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field

from supportcenter.dependencies.tickets import TicketManagerDep
from supportcenter.tickets.errors import (
    InvalidTicketNumberError,
    NullArgumentError,
    TicketNotFoundError,
    TicketValidationError,
)
from supportcenter.tickets.models import Ticket, TicketResponse
from supportcenter.tickets.state import TicketState

router = APIRouter(prefix="/tickets", tags=["tickets"])


# Text limits are enforced by the manager so that every caller gets the same rule.
class TicketCreateRequest(BaseModel):
    account_id: int
    text: str
    device_name: str | None = Field(default=None, max_length=255)


class TicketUpdateRequest(BaseModel):
    account_id: int
    text: str
    state: TicketState
    device_name: str | None = Field(default=None, max_length=255)


class TicketResponseCreateRequest(BaseModel):
    text: str
    is_client_response: bool = False


class TicketResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_number: int
    text: str
    date: datetime
    is_client_response: bool


class TicketModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    account_id: int
    text: str
    date_opened: datetime
    state: TicketState
    device_name: str | None
    is_hardware: bool
    responses: list[TicketResponseModel]


def _to_model(ticket: Ticket) -> TicketModel:
    return TicketModel.model_validate(ticket)


def _to_response_model(response: TicketResponse) -> TicketResponseModel:
    return TicketResponseModel.model_validate(response)


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _not_found(exc: TicketNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _invalid(exc: TicketValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


@router.get("", response_model=list[TicketModel])
async def list_tickets(manager: TicketManagerDep) -> list[TicketModel]:
    tickets = await manager.get_tickets()
    return [_to_model(ticket) for ticket in tickets]


@router.post("", response_model=TicketModel, status_code=status.HTTP_201_CREATED)
async def create_ticket(payload: TicketCreateRequest, manager: TicketManagerDep) -> TicketModel:
    try:
        ticket = await manager.add_ticket(payload.account_id, payload.text, device_name=payload.device_name)
    except TicketValidationError as exc:
        raise _invalid(exc) from exc
    return _to_model(ticket)


@router.get("/{number}", response_model=TicketModel)
async def get_ticket(number: int, manager: TicketManagerDep) -> TicketModel:
    try:
        ticket = await manager.get_ticket(number)
    except InvalidTicketNumberError as exc:
        raise _bad_request(exc) from exc
    except TicketNotFoundError as exc:
        raise _not_found(exc) from exc
    return _to_model(ticket)


@router.put("/{number}", response_model=TicketModel)
async def update_ticket(number: int, payload: TicketUpdateRequest, manager: TicketManagerDep) -> TicketModel:
    try:
        current = await manager.get_ticket(number)
        updated = replace(
            current,
            account_id=payload.account_id,
            text=payload.text,
            state=payload.state,
            device_name=payload.device_name,
        )
        await manager.change_ticket(updated)
    except (InvalidTicketNumberError, NullArgumentError) as exc:
        raise _bad_request(exc) from exc
    except TicketNotFoundError as exc:
        raise _not_found(exc) from exc
    except TicketValidationError as exc:
        raise _invalid(exc) from exc
    return _to_model(updated)


@router.delete("/{number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(number: int, manager: TicketManagerDep) -> None:
    try:
        await manager.remove_ticket(number)
    except TicketNotFoundError as exc:
        raise _not_found(exc) from exc


@router.get("/{number}/responses", response_model=list[TicketResponseModel])
async def list_ticket_responses(number: int, manager: TicketManagerDep):
    responses = await manager.get_ticket_responses(number)
    if not responses:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [_to_response_model(response) for response in responses]


@router.post(
    "/{number}/responses",
    response_model=TicketResponseModel,
    status_code=status.HTTP_201_CREATED,
)
async def create_ticket_response(
    number: int,
    payload: TicketResponseCreateRequest,
    manager: TicketManagerDep,
) -> TicketResponseModel:
    try:
        response = await manager.add_ticket_response(number, payload.text, payload.is_client_response)
    except TicketValidationError as exc:
        raise _invalid(exc) from exc
    except TicketNotFoundError as exc:
        raise _not_found(exc) from exc
    return _to_response_model(response)


@router.post("/{number}/close", status_code=status.HTTP_204_NO_CONTENT)
async def close_ticket(number: int, manager: TicketManagerDep) -> None:
    try:
        await manager.close_ticket(number)
    except TicketNotFoundError as exc:
        raise _not_found(exc) from exc
