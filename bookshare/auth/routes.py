# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /register     - Create account, returns a session token
#   POST /login        - Verify credentials, returns a session token
#   POST /addUser      - Insert a raw user object
#   GET  /user         - Check a user by email, returns a session token
#   PUT  /update-user  - Set a user's roles (session token required)
#
# =============================================================================

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from bookshare.auth import accounts
from bookshare.auth.capabilities import Capability
from bookshare.auth.context import AuthContext
from bookshare.auth.policies import get_storage, require_if_strict
from bookshare.core.models import (
    AddUserRequest,
    AuthResponse,
    InsertResult,
    LoginRequest,
    RegisterRequest,
    RoleUpdateRequest,
    UpdateResult,
    UserCheckResponse,
)
from bookshare.storage.base import StorageProvider

router = APIRouter(tags=["auth"])


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("/register", response_model=AuthResponse)
async def register(
    data: RegisterRequest,
    storage: StorageProvider = Depends(get_storage),
):
    """Create a new account with the VIEW_ALL role."""
    return await accounts.register(storage, data)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    storage: StorageProvider = Depends(get_storage),
):
    """Authenticate and get a session token."""
    return await accounts.login(storage, data)


@router.post("/addUser", response_model=InsertResult)
async def add_user(
    data: AddUserRequest,
    storage: StorageProvider = Depends(get_storage),
):
    return await accounts.add_user(storage, data)


@router.get("/user", response_model=UserCheckResponse)
async def check_user(
    email: str = Query(...),
    storage: StorageProvider = Depends(get_storage),
):
    """Look up a user by email and issue a token for them."""
    found = await accounts.check_user(storage, email)
    if not found:
        return JSONResponse(status_code=404, content={"error": "User not found"})
    return found


# =============================================================================
# Protected Endpoints
# =============================================================================

@router.put("/update-user", response_model=UpdateResult)
async def update_user(
    data: RoleUpdateRequest,
    ctx: AuthContext = Depends(
        require_if_strict(Capability.USER_ROLES_EDIT, "You are not allowed to change roles")
    ),
    storage: StorageProvider = Depends(get_storage),
):
    """
    Set the roles of the user with the given email (upsert).

    Any authenticated caller may do this unless strict permissions are on.
    """
    return await accounts.update_roles(storage, data.email, data.roles)
