from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import InvalidTokenError
from jwt import ExpiredSignatureError, InvalidSignatureError, DecodeError
import jwt

from db import database
from config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)

SECRET_KEY = settings.SECRET_KEY.get_secret_value()
ALGORITHM = settings.ALGORITHM


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from the bearer token. `id` is opaque to us."""
    id: str


def get_db():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    user_token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> CurrentUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="You must be signed in to perform this action.",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not user_token:
        raise credentials_exception
    try:
        payload = jwt.decode(user_token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise credentials_exception
    except (InvalidSignatureError, DecodeError, InvalidTokenError):
        raise credentials_exception

    sub = payload.get("sub")
    if sub is None or str(sub).strip() == "":
        raise credentials_exception
    return CurrentUser(id=str(sub))
