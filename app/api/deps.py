# app/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.crud import user as crud_user
from app.db.session import get_db
from app.models.user import ROLE_HIERARCHY, Role, User
from app.schemas.token import TokenPayload

# Tokens are issued by the campus login flow; `tokenUrl` is only used for
# the OpenAPI documentation.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def get_token_payload(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    return token_data


def get_current_user(
    token_data: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    try:
        user_id = int(token_data.sub)
    except ValueError:
        user_id = None

    user = crud_user.get(db, id=user_id) if user_id is not None else None
    if not user or not user.is_available:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or disabled",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(minimum: Role):
    """
    Dependency factory: the current user must hold `minimum` or a higher role.
    """

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if ROLE_HIERARCHY.get(Role(current_user.role), 0) < ROLE_HIERARCHY[minimum]:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return checker


get_current_staff = require_role(Role.STAFF)
get_current_admin = require_role(Role.ADMIN)
