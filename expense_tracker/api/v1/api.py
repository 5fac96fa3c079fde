from fastapi import APIRouter

from expense_tracker.core.auth import auth_backend, fastapi_users
from expense_tracker.api.v1.routes import auth, users, categories, transactions, reports

api_router = APIRouter()

# Custom auth routes first so /auth/jwt/logout wins over the FastAPI Users one
api_router.include_router(auth.router, prefix="/auth")
api_router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["Authentication"],
)
api_router.include_router(users.router)
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(reports.router)
