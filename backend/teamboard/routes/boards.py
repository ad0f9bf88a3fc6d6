# teamboard/routes/boards.py
from datetime import datetime

from bson import ObjectId
from fastapi import APIRouter, Depends, Response, status
from pymongo import ReturnDocument

from teamboard.core.errors import AppError, ErrorResponses
from teamboard.db.database import board_collection
from teamboard.middleware.rbac import get_current_user
from teamboard.models.board import Board
from teamboard.schemas.board import BoardCreateSchema, BoardUpdateSchema
from teamboard.schemas.user import FindByEmailsSchema
from teamboard.serialize import is_valid_object_id, serialize_doc
from teamboard.service.user_service import resolve_emails

boards_router = APIRouter(prefix="/boards", tags=["Boards"])


def board_out(board: dict) -> dict:
    out = serialize_doc(board)
    out["id"] = out.pop("_id")
    return out


async def get_member_board(board_id: str, user: dict) -> dict:
    """
    Fetch a live board the user belongs to.
    """
    if not is_valid_object_id(board_id):
        raise AppError("Invalid board ID.", status.HTTP_400_BAD_REQUEST)

    board = await board_collection().find_one({"_id": ObjectId(board_id), "isDeleted": False})
    if not board:
        raise ErrorResponses.board_not_found()

    if user["_id"] not in board.get("members", []):
        raise AppError("You are not a member of this board.", status.HTTP_403_FORBIDDEN)
    return board


def ensure_owner(board: dict, user: dict):
    if board["owner"] != user["_id"]:
        raise AppError("Only the board owner can do this.", status.HTTP_403_FORBIDDEN)


@boards_router.post("", status_code=status.HTTP_201_CREATED)
async def create_board(data: BoardCreateSchema, user: dict = Depends(get_current_user)):
    board = Board(name=data.name, description=data.description, owner=user["_id"]).to_document()
    result = await board_collection().insert_one(board)
    board["_id"] = result.inserted_id
    return {"status": "success", "data": {"board": board_out(board)}}


@boards_router.get("")
async def list_my_boards(user: dict = Depends(get_current_user)):
    boards = await board_collection().find(
        {"members": user["_id"], "isDeleted": False}
    ).sort("createdAt", -1).to_list(length=None)
    return {"status": "success", "results": len(boards), "data": {"boards": [board_out(b) for b in boards]}}


@boards_router.get("/{board_id}")
async def get_board(board_id: str, user: dict = Depends(get_current_user)):
    board = await get_member_board(board_id, user)
    return {"status": "success", "data": {"board": board_out(board)}}


@boards_router.patch("/{board_id}")
async def update_board(board_id: str, data: BoardUpdateSchema, user: dict = Depends(get_current_user)):
    board = await get_member_board(board_id, user)
    ensure_owner(board, user)

    update = data.model_dump(exclude_unset=True, exclude_none=True)
    update["updatedAt"] = datetime.utcnow()
    updated = await board_collection().find_one_and_update(
        {"_id": board["_id"]},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    return {"status": "success", "data": {"board": board_out(updated)}}


@boards_router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board(board_id: str, user: dict = Depends(get_current_user)):
    board = await get_member_board(board_id, user)
    ensure_owner(board, user)

    await board_collection().update_one(
        {"_id": board["_id"]},
        {"$set": {"isDeleted": True, "updatedAt": datetime.utcnow()}}
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@boards_router.post("/{board_id}/members")
async def invite_members(board_id: str, data: FindByEmailsSchema, user: dict = Depends(get_current_user)):
    board = await get_member_board(board_id, user)
    ensure_owner(board, user)

    result = await resolve_emails(data.emails, user["email"])
    new_ids = [u["_id"] for u in result["users"]]
    if new_ids:
        await board_collection().update_one(
            {"_id": board["_id"]},
            {
                "$addToSet": {"members": {"$each": new_ids}},
                "$set": {"updatedAt": datetime.utcnow()},
            }
        )

    return {
        "status": "success",
        "data": {
            "foundUsers": result["foundUsers"],
            "notFoundEmails": result["notFoundEmails"],
        },
    }
