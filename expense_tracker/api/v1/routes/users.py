# expense_tracker/api/v1/routes/users.py
from fastapi import APIRouter, Depends, status

from expense_tracker.core.auth import User, UserManager, UserRead, get_user_manager
from expense_tracker.api.deps import get_current_user

router = APIRouter(tags=["User Management"])

@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_own_profile(
    user: User = Depends(get_current_user),
    user_manager: UserManager = Depends(get_user_manager),
):
    """Deactivate the current account; its data is kept"""
    await user_manager.soft_delete(user)
    return None
