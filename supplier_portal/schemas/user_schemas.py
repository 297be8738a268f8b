"""
User profile schemas.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


# Seuls ces champs peuvent être modifiés par l'utilisateur lui-même.
ALLOWED_PROFILE_UPDATES = ("displayName", "photoURL")


class UserProfile(BaseModel):
    uid: str
    email: Optional[str] = None
    displayName: Optional[str] = None
    photoURL: Optional[str] = None
    emailVerified: bool = False
    disabled: bool = False
    creationTime: Optional[str] = None
    lastSignInTime: Optional[str] = None


class ProfileResponse(BaseModel):
    profile: UserProfile


class ProfileUpdateRequest(BaseModel):
    """Any JSON object is accepted; fields outside the whitelist are dropped."""
    model_config = ConfigDict(extra="ignore")

    displayName: Optional[str] = None
    photoURL: Optional[str] = None


class ProfileUpdateResponse(BaseModel):
    message: str
    updates: dict
    profile: UserProfile


class UserListResponse(BaseModel):
    users: List[UserProfile]
    count: int
