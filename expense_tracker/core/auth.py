# expense_tracker/core/auth.py

import uuid
import logging
from datetime import datetime
from typing import Optional, Tuple, Union

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users import FastAPIUsers, BaseUserManager, UUIDIDMixin, exceptions
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users import schemas
from pydantic import ConfigDict, Field

from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Base, get_async_session, utcnow
from .config import settings
from .exceptions import AuthError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# 1. User DB model
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    name = Column(String(length=100), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    # Users are never purged; a set deleted_at also clears is_active
    deleted_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<User email={self.email}>"

# 2. Pydantic schemas
class UserRead(schemas.BaseUser[uuid.UUID]):
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserCreate(schemas.BaseUserCreate):
    name: str = Field(..., min_length=2, max_length=100)

# 3. User Manager
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise exceptions.InvalidPasswordException(
                reason=f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has registered")

    async def soft_delete(self, user: User) -> User:
        """Deactivate the account instead of removing the row"""
        user = await self.user_db.update(user, {"is_active": False, "deleted_at": utcnow()})
        logger.info(f"User {user.email} deactivated")
        return user

# 4. User Database
async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)

# 5. User Manager dependency
async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# 6. Authentication
bearer_transport = BearerTransport(tokenUrl="/api/v1/auth/jwt/login")

def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        token_audience=["fastapi-users:auth"],
    )

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# 7. FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

# 8. Credential operations used by the auth routes
async def register_user(user_manager: UserManager, user_create: UserCreate) -> User:
    try:
        return await user_manager.create(user_create, safe=True)
    except exceptions.UserAlreadyExists:
        raise ConflictError("Email is already registered")
    except exceptions.InvalidPasswordException as e:
        raise ValidationError(str(e.reason))

async def login_user(user_manager: UserManager, email: str, password: str) -> Tuple[User, str]:
    """Verify credentials and issue an access token"""
    credentials = OAuth2PasswordRequestForm(username=email, password=password)
    user = await user_manager.authenticate(credentials)
    if user is None or not user.is_active:
        logger.warning(f"Failed login attempt for {email}")
        raise AuthError("Invalid email or password")

    token = await get_jwt_strategy().write_token(user)
    return user, token

async def authenticate_token(user_manager: UserManager, token: Optional[str]) -> User:
    if not token:
        raise AuthError("Not authenticated")

    user = await get_jwt_strategy().read_token(token, user_manager)
    if user is None:
        raise AuthError("Invalid or expired token")
    if not user.is_active:
        raise AuthError("Inactive user")
    return user

__all__ = [
    "fastapi_users",
    "auth_backend",
    "get_user_db",
    "get_user_manager",
    "User",
    "UserRead",
    "UserCreate",
    "UserManager",
    "register_user",
    "login_user",
    "authenticate_token",
]
