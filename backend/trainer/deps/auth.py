# trainer/deps/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from trainer.db import get_db
from trainer.models import User
from trainer.security import decode_token

# Exposes Bearer auth in Swagger; login endpoint issues the token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    unauth = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
        sub = payload.get("sub")
        if sub is None:
            raise unauth
        user = db.get(User, int(sub))
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError:
        raise unauth

    if not user:
        raise unauth
    return user

def require_role(*allowed_roles: str):
    """
    Usage: dependencies=[Depends(require_role("coach", "admin"))]
    """
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return current_user
    return dependency

def can_act_for(current_user: User, owner_id: int) -> bool:
    """Owners act on their own data; coaches and admins on anyone's."""
    return current_user.id == owner_id or current_user.role in ("coach", "admin")
