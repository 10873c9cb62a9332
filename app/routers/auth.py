import logging
import secrets
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel import Session, select

from app.core.config import SESSION_COOKIE_NAME, VERIFICATION_EXPIRE_HOURS
from app.core.security import (
    create_access_token,
    create_user_session,
    get_current_session,
    get_current_user,
    get_password_hash,
    require_session,
    require_user,
    verify_password,
)
from app.database import get_session
from app.models.account import Account
from app.models.base import utcnow
from app.models.session import UserSession
from app.models.user import User
from app.models.verification import Verification
from app.schemas.auth import (
    ChangePasswordRequest,
    RevokeSessionRequest,
    SessionRead,
    SessionWithUser,
    SignInRequest,
    SignUpRequest,
)
from app.schemas.user import UserRead


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _client_info(request: Request):
    host = request.client.host if request.client else None
    return host, request.headers.get("user-agent")


def _signed_in(response: Response, user_session: UserSession, user: User) -> dict:
    access_token = create_access_token(user_session)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        access_token,
        httponly=True,
        samesite="lax",
        max_age=int((user_session.expires_at - utcnow()).total_seconds()),
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UserRead.model_validate(user),
    }


def _credential_account(session: Session, user_id: str) -> Optional[Account]:
    return session.exec(
        select(Account).where(
            Account.user_id == user_id,
            Account.provider_id == "credential",
        )
    ).first()


# =========================
# SIGN UP / SIGN IN / SIGN OUT
# =========================

@router.post("/sign-up/email", status_code=status.HTTP_201_CREATED)
def sign_up(
    payload: SignUpRequest,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    email = payload.email.lower()

    existing_user = session.exec(select(User).where(User.email == email)).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=email,
        phone=payload.phone,
        role=payload.role,
    )
    session.add(user)
    session.flush()

    session.add(
        Account(
            account_id=user.id,
            provider_id="credential",
            user_id=user.id,
            password=get_password_hash(payload.password),
        )
    )
    session.add(
        Verification(
            identifier=email,
            value=secrets.token_urlsafe(32),
            expires_at=utcnow() + timedelta(hours=VERIFICATION_EXPIRE_HOURS),
        )
    )

    ip_address, user_agent = _client_info(request)
    user_session = create_user_session(session, user, ip_address, user_agent)

    session.commit()
    session.refresh(user)
    logger.info("user %s signed up", user.id)

    return _signed_in(response, user_session, user)


@router.post("/sign-in/email")
def sign_in(
    payload: SignInRequest,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    user = session.exec(select(User).where(User.email == payload.email.lower())).first()
    account = _credential_account(session, user.id) if user else None

    if not account or not account.password or not verify_password(payload.password, account.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    ip_address, user_agent = _client_info(request)
    user_session = create_user_session(session, user, ip_address, user_agent)
    session.commit()
    session.refresh(user_session)

    return _signed_in(response, user_session, user)


@router.post("/sign-out")
def sign_out(
    response: Response,
    user_session: UserSession = Depends(require_session),
    session: Session = Depends(get_session),
):
    session.delete(user_session)
    session.commit()
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"success": True}


# =========================
# SESSIONS
# =========================

@router.get("/get-session")
def get_session_info(
    user_session: Optional[UserSession] = Depends(get_current_session),
    current_user: Optional[User] = Depends(get_current_user),
):
    if user_session is None or current_user is None:
        return None
    return SessionWithUser(
        session=SessionRead.model_validate(user_session),
        user=UserRead.model_validate(current_user),
    )


@router.get("/list-sessions")
def list_sessions(
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    sessions = session.exec(
        select(UserSession).where(
            UserSession.user_id == current_user.id,
            UserSession.expires_at > utcnow(),
        )
    ).all()
    return [SessionRead.model_validate(s) for s in sessions]


@router.post("/revoke-session")
def revoke_session(
    payload: RevokeSessionRequest,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    target = session.exec(
        select(UserSession).where(
            UserSession.token == payload.token,
            UserSession.user_id == current_user.id,
        )
    ).first()
    if not target:
        raise HTTPException(status_code=404, detail="Session not found")

    session.delete(target)
    session.commit()
    return {"success": True}


@router.post("/revoke-other-sessions")
def revoke_other_sessions(
    user_session: UserSession = Depends(require_session),
    session: Session = Depends(get_session),
):
    others = session.exec(
        select(UserSession).where(
            UserSession.user_id == user_session.user_id,
            UserSession.id != user_session.id,
        )
    ).all()
    for other in others:
        session.delete(other)
    session.commit()
    return {"success": True, "revoked": len(others)}


# =========================
# PASSWORD / EMAIL
# =========================

@router.post("/change-password")
def change_password(
    payload: ChangePasswordRequest,
    user_session: UserSession = Depends(require_session),
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    account = _credential_account(session, current_user.id)
    if not account or not account.password or not verify_password(payload.current_password, account.password):
        raise HTTPException(status_code=400, detail="Invalid password")

    account.password = get_password_hash(payload.new_password)
    account.updated_at = utcnow()
    session.add(account)

    if payload.revoke_other_sessions:
        others = session.exec(
            select(UserSession).where(
                UserSession.user_id == current_user.id,
                UserSession.id != user_session.id,
            )
        ).all()
        for other in others:
            session.delete(other)

    session.commit()
    return {"success": True}


@router.get("/verify-email")
def verify_email(token: str, session: Session = Depends(get_session)):
    verification = session.exec(
        select(Verification).where(Verification.value == token)
    ).first()
    if not verification or verification.expires_at <= utcnow():
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    user = session.exec(select(User).where(User.email == verification.identifier)).first()
    if not user:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    user.email_verified = True
    user.updated_at = utcnow()
    session.add(user)
    session.delete(verification)
    session.commit()
    return {"success": True}
