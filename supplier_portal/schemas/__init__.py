from .role_schemas import (
    UserPublic,
    SupplierRecord,
    AdminRecord,
    RoleFlags,
    CheckRolesResponse,
    CheckSupplierResponse,
    CheckAdminResponse,
    SupplierMeResponse,
)
from .user_schemas import (
    ALLOWED_PROFILE_UPDATES,
    UserProfile,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserListResponse,
)
