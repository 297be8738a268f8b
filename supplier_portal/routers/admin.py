import logging

from fastapi import APIRouter, Depends

from ..auth.dependencies import require_admin
from ..auth.identity import Identity
from ..context import AppContext, get_context
from ..schemas.user_schemas import UserListResponse

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/users", response_model=UserListResponse)
def list_users(
    current_admin: Identity = Depends(require_admin),
    context: AppContext = Depends(get_context),
):
    users = context.identity_provider.list_users()
    logger.info("Admin %s listed %d users", current_admin.unique_id, len(users))
    return {"users": users, "count": len(users)}
