# expense_tracker/api/v1/routes/auth.py
from fastapi import APIRouter, Depends, Response, status

from expense_tracker.core.auth import (
    UserCreate,
    UserManager,
    UserRead,
    get_user_manager,
    login_user,
    register_user,
)
from expense_tracker.schemas.user import LoginRequest, LoginResponse, RegisterRequest

router = APIRouter(tags=["Authentication"])

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    user_manager: UserManager = Depends(get_user_manager),
):
    """Create an account; the email must not be registered yet"""
    user_create = UserCreate(name=data.name, email=data.email, password=data.password)
    return await register_user(user_manager, user_create)

@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    user_manager: UserManager = Depends(get_user_manager),
):
    """Exchange email and password for a bearer token"""
    user, token = await login_user(user_manager, data.email, data.password)
    return LoginResponse(user=UserRead.model_validate(user), token=token)

@router.post("/jwt/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """
    Logout endpoint that doesn't require authentication.
    Tokens are stateless, so this only clears the access token cookie if present.
    """
    response.delete_cookie(key="access_token")
    return {"detail": "Successfully logged out"}
