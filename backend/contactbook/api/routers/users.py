from fastapi import APIRouter, Depends

from contactbook.api.deps import require_admin
from contactbook.core.policy import Requester
from contactbook.schemas.auth import UserListItem
from contactbook.services import users as user_store

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserListItem],
    dependencies=[Depends(require_admin)],
)
async def list_users():
    """
    List every account (admin only), oldest first, without password hashes.
    """
    return [user_store.user_to_dict(u) for u in await user_store.list_users()]


@router.delete("/{user_id}")
async def delete_user(user_id: str, admin: Requester = Depends(require_admin)):
    """
    Delete an account (admin only). The user's contacts are kept.

    Raises:
        InvalidOperation (400): Admin tried to delete their own account (CANNOT_DELETE_SELF)
        NotFound (404): No such user (USER_NOT_FOUND)
    """
    await user_store.delete_user(user_id, acting_user_id=admin.id)
    return {"success": True}
