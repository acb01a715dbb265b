"""
Board API endpoints.

Routes:
- GET /boards - Boards the caller can view
- POST /boards - Create board
- GET /boards/b/{slug} - Board by slug
- GET /boards/{id} - Board with members and tasks
- PATCH /boards/{id} - Update board
- DELETE /boards/{id} - Delete board
- POST /boards/{id}/members - Add member
- DELETE /boards/{id}/members/{user_id} - Remove member

Dependencies: vtasker.application.services, vtasker.models
System role: Kanban board HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from vtasker.api.deps.dependencies import get_board_service, get_current_user
from vtasker.api.routers.router_utils import handle_api_errors
from vtasker.application.services.auth_service import CurrentUser
from vtasker.application.services.board_service import BoardService
from vtasker.core.exceptions import ValidationError
from vtasker.models.board import (
    BoardDetailResponse,
    BoardMemberInput,
    BoardResponse,
    CreateBoardRequest,
    UpdateBoardRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("", response_model=list[BoardResponse])
@handle_api_errors
async def list_boards(
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> list[BoardResponse]:
    boards = await board_service.list_boards(current.id)
    return [BoardResponse(**b) for b in boards]


@router.post("", response_model=BoardDetailResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_board(
    body: CreateBoardRequest,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    """
    Create a board owned by the caller.

    Raises:
        HTTPException(400): Blank name or unknown member
    """
    if not body.name.strip():
        raise ValidationError("Board name cannot be empty or whitespace-only", field="name")

    logger.info(
        "Creating board",
        extra={"board_name": body.name, "member_count": len(body.members)},
    )
    data = await board_service.create_board(
        owner_id=current.id,
        name=body.name,
        description=body.description,
        is_public=body.is_public,
        members=[m.model_dump() for m in body.members],
    )
    return BoardDetailResponse(**data)


@router.get("/b/{slug}", response_model=BoardDetailResponse)
@handle_api_errors
async def get_board_by_slug(
    slug: str,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    return BoardDetailResponse(**await board_service.get_board_by_slug(current.id, slug))


@router.get("/{board_id}", response_model=BoardDetailResponse)
@handle_api_errors
async def get_board(
    board_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    """
    Board with members and tasks.

    Raises:
        HTTPException(403): No view permission
        HTTPException(404): Board not found
    """
    return BoardDetailResponse(**await board_service.get_board(current.id, board_id))


@router.patch("/{board_id}", response_model=BoardDetailResponse)
@handle_api_errors
async def update_board(
    board_id: UUID,
    body: UpdateBoardRequest,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    data = await board_service.update_board(current.id, board_id, body.model_dump(exclude_unset=True))
    return BoardDetailResponse(**data)


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_board(
    board_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> None:
    """Delete a board with its tasks. Owner or admin only."""
    await board_service.delete_board(current.id, board_id)


@router.post("/{board_id}/members", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def add_member(
    board_id: UUID,
    body: BoardMemberInput,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> BoardResponse:
    """
    Add a member with a role.

    Raises:
        HTTPException(403): Caller is not owner or admin
        HTTPException(409): Already a member
    """
    data = await board_service.add_member(current.id, board_id, body.user_id, body.role)
    return BoardResponse(**data)


@router.delete("/{board_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def remove_member(
    board_id: UUID,
    user_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    board_service: BoardService = Depends(get_board_service),
) -> None:
    await board_service.remove_member(current.id, board_id, user_id)
