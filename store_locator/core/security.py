import secrets
from typing import Optional

from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from sqlmodel import Session, select

from store_locator.core.config import settings
from store_locator.database import get_session
from store_locator.logger import logging
from store_locator.models import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

API_KEY_NAME = "X-API-Key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=True)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def authenticate(session: Session, username: str, password: str) -> Optional[User]:
    user = session.exec(select(User).where(User.username == username)).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user

def rotate_api_key(session: Session, user: User) -> str:
    user.api_key = secrets.token_urlsafe(32)
    session.add(user)
    session.commit()
    logging.info(f"API key rotated for user {user.username}")
    return user.api_key

def ensure_admin_user(session: Session) -> User:
    """Create the bootstrap admin account from settings when it is missing."""
    admin = session.exec(select(User).where(User.username == settings.ADMIN_USERNAME)).first()
    if admin:
        logging.info(f"Admin user '{admin.username}' exists")
        return admin

    admin = User(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        is_active=True,
        is_admin=True
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    logging.info(f"Admin user '{admin.username}' created; request a key from /generate-api-key")
    return admin


async def get_current_user(
    api_key: str = Depends(api_key_header),
    session: Session = Depends(get_session)
) -> User:
    user = session.exec(select(User).where(User.api_key == api_key)).first()
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key or inactive user"
        )
    return user

async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can manage store locations"
        )
    return current_user
