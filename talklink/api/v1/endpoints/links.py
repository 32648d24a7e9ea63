"""Link API: thin routes delegating to LinkResolutionService.

GET /link resolves a room and returns its call link, GET /rooms lists
(optionally filtered) rooms, GET /test checks the remote connection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from talklink.api.v1.dependencies import get_link_service
from talklink.application.use_cases.link_resolution import LinkResolutionService
from talklink.core.limiter import limit_link
from talklink.domain.enums import LinkFailure, SearchField
from talklink.schemas.base import ErrorResponse
from talklink.schemas.link import (
    ConnectionTestResponse,
    LinkErrorResponse,
    LinkResponse,
    RoomListingResponse,
    RoomsResponse,
)

router = APIRouter()

_FAILURE_STATUS: dict[LinkFailure, int] = {
    LinkFailure.IDENTIFIER_REQUIRED: 400,
    LinkFailure.NOT_FOUND: 404,
    LinkFailure.REMOTE_ERROR: 502,
    LinkFailure.TOKEN_MISSING: 502,
    LinkFailure.NOT_CONFIGURED: 503,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.get(
    "/link",
    response_model=LinkResponse,
    responses={
        400: {"model": LinkErrorResponse},
        404: {"model": LinkErrorResponse, "description": "Room not found"},
        502: {"model": LinkErrorResponse},
        503: {"model": LinkErrorResponse, "description": "Not configured"},
    },
)
@limit_link
async def generate_link(
    request: Request,
    link_svc: Annotated[LinkResolutionService, Depends(get_link_service)],
    room_name: str = Query("", alias="roomName", description="Token, name, displayName or objectId"),
    search_by: str = Query("", alias="searchBy", description="Restrict matching to one field"),
):
    """Resolve a room on the remote server and return its call link on the target host.

    Search priority without searchBy: token, objectId, name, displayName,
    then case-insensitive displayName and name.
    """
    room_name = room_name.strip()
    search_by = search_by.strip()
    if not room_name:
        return _error(
            400, "Room identifier is required. Use token, name, displayName, or objectId."
        )
    if search_by and search_by not in SearchField.values():
        return _error(
            400, "Invalid searchBy value. Valid options: token, name, displayName, objectId"
        )

    result = await link_svc.resolve(room_name, SearchField(search_by) if search_by else None)
    if not result.success:
        status = _FAILURE_STATUS.get(result.failure, 404) if result.failure else 404
        return JSONResponse(
            status_code=status,
            content=LinkErrorResponse.from_result(result).to_body(),
        )
    return LinkResponse.from_result(result)


@router.get("/rooms", response_model=RoomsResponse, responses={500: {"model": ErrorResponse}})
async def search_rooms(
    link_svc: Annotated[LinkResolutionService, Depends(get_link_service)],
    search: str = Query("", description="Matches displayName, name, token, objectId, description"),
):
    """List rooms on the remote server, optionally filtered by a search term."""
    search = search.strip()
    result = await link_svc.search(search or None)
    if not result.success:
        return _error(500, result.error or "Unknown error")
    return RoomsResponse(rooms=[RoomListingResponse.from_dto(r) for r in result.rooms])


@router.get("/test", response_model=ConnectionTestResponse, responses={500: {"model": ErrorResponse}})
async def test_connection(
    link_svc: Annotated[LinkResolutionService, Depends(get_link_service)],
):
    """Check that the remote server accepts the configured credentials."""
    result = await link_svc.test_connection()
    if not result.success:
        return _error(500, result.error or "Unknown error")
    return ConnectionTestResponse.from_result(result)
