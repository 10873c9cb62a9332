import logging
import secrets
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlmodel import Session, select

from app.core.config import ALGORITHM, SECRET_KEY, SESSION_COOKIE_NAME, SESSION_EXPIRE_DAYS
from app.database import get_session
from app.models.base import utcnow
from app.models.session import UserSession
from app.models.user import User


logger = logging.getLogger(__name__)


# =========================
# PASSWORD HASH
# =========================

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# =========================
# SESSIONS
# =========================

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/sign-in/email", auto_error=False)


def create_user_session(
    session: Session,
    user: User,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> UserSession:
    """Add a session row for the user. The caller commits."""
    expires_at = utcnow() + (expires_delta or timedelta(days=SESSION_EXPIRE_DAYS))

    user_session = UserSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=expires_at,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(user_session)
    return user_session


def create_access_token(user_session: UserSession) -> str:
    to_encode = {
        "sub": user_session.user_id,
        "sid": user_session.token,
        "exp": user_session.expires_at,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# =========================
# CURRENT SESSION / USER
# FastAPI resolves each dependency once per request
# =========================

def get_current_session(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> Optional[UserSession]:
    raw_token = token or request.cookies.get(SESSION_COOKIE_NAME)
    if not raw_token:
        return None

    try:
        payload = jwt.decode(raw_token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.warning("Failed to fetch session: %s", exc)
        return None

    session_token = payload.get("sid")
    if session_token is None:
        return None

    user_session = session.exec(
        select(UserSession).where(UserSession.token == session_token)
    ).first()

    if user_session is None or user_session.expires_at <= utcnow():
        return None

    return user_session


def get_current_user(
    user_session: Optional[UserSession] = Depends(get_current_session),
    session: Session = Depends(get_session),
) -> Optional[User]:
    if user_session is None:
        return None
    return session.get(User, user_session.user_id)


def require_session(
    user_session: Optional[UserSession] = Depends(get_current_session),
) -> UserSession:
    if user_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_session


def require_user(
    user_session: UserSession = Depends(require_session),
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user
