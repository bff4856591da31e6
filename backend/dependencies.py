from fastapi import Depends, HTTPException, Cookie, Header, status
from typing import Optional
import jwt
from datetime import datetime, timedelta, timezone
import logging
from sqlalchemy.orm import Session

from config import Settings, get_settings
from db import get_db
from models import User
from models1.jobs import JobApplication
from services.ai_client import AIContentClient
from services.fallback import FallbackGenerator

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"   # ensures the token issued by trusted party(Using a shared secret) and has not been changed suring transit.
JWT_EXPIRATION_MINUTES = 15


def create_jwt_token(user_id: int, user_email: str, expires_in_minutes: int = JWT_EXPIRATION_MINUTES,
                     secret: Optional[str] = None) -> str:   # -> represents the tokn to be in string format
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_in_minutes)
    payload = {"user_id": user_id, "sub": user_email, "exp": expire} #sub means subject, token will had this info
    token = jwt.encode(payload, secret or get_settings().secret_key, algorithm=JWT_ALGORITHM)
    return token


def get_current_user(settings: Settings = Depends(get_settings),
                     authorization: Optional[str] = Header(None),
                     access_token_cookie: Optional[str] = Cookie(None)) -> dict:
    #Determine which token to use:
    token_value = None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme != "Bearer" or not credentials:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized"
            )
        token_value = credentials
    elif access_token_cookie:
        token_value = access_token_cookie
    else:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    try:
        payload = jwt.decode(token_value, settings.secret_key, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Access token expired.Please refresh.'
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Access Token"
        )
    user_email = payload.get("sub")
    if not user_email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return {"user_id": payload.get("user_id"), "email": user_email}


def get_current_db_user(db: Session = Depends(get_db),
                        session_user: dict = Depends(get_current_user)) -> User:
    """Resolve the session's email to a User row."""
    user = db.query(User).filter(User.email == session_user["email"]).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_owned_job(job_id: int, db: Session, user: User) -> JobApplication:
    # same 404 whether the row is missing or belongs to someone else
    rec = db.query(JobApplication).filter_by(id=job_id, user_id=user.id).first()
    if not rec:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job application not found")
    return rec


def require_ai_access(user: User = Depends(get_current_db_user),
                      settings: Settings = Depends(get_settings)) -> User:
    """Premium gate for the AI endpoints, switched by PREMIUM_AI_ONLY."""
    if settings.premium_ai_only and not user.is_premium:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Premium feature. Upgrade to access AI-powered interview preparation."
        )
    return user


def get_ai_client(settings: Settings = Depends(get_settings)) -> Optional[AIContentClient]:
    if not settings.has_api_key:
        return None
    return AIContentClient(api_key=settings.openai_api_key, model=settings.openai_model)


def get_fallback_generator() -> FallbackGenerator:
    return FallbackGenerator()
