"""
Profile endpoints for the authenticated user.
"""
import logging

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_current_identity
from ..auth.identity import Identity
from ..context import AppContext, get_context
from ..errors import ValidationError
from ..schemas.user_schemas import (
    ALLOWED_PROFILE_UPDATES,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)

router = APIRouter(prefix="/user", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    context: AppContext = Depends(get_context),
):
    profile = context.identity_provider.get_user(identity.unique_id)
    return {"profile": profile}


@router.put("/update", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    context: AppContext = Depends(get_context),
):
    """
    Update the caller's profile.

    Only ``displayName`` and ``photoURL`` are applied; any other field is
    dropped without error. A body with none of them is rejected with 400.
    """
    updates = {
        field: getattr(payload, field)
        for field in ALLOWED_PROFILE_UPDATES
        if field in payload.model_fields_set
    }
    if not updates:
        raise ValidationError(
            "No valid field to update",
            error="No valid updates provided",
            extra={"allowedUpdates": list(ALLOWED_PROFILE_UPDATES)},
        )

    profile = context.identity_provider.update_user(identity.unique_id, **updates)
    logger.info("Profile of %s updated (%s)", identity.unique_id, ", ".join(updates))
    return {
        "message": "Profile updated",
        "updates": updates,
        "profile": profile,
    }
