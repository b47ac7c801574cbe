from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.core.security import verify_token
from app.domains.access.entities import Actor, normalize_user_key

# Токены выдает внешний провайдер идентификации
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


async def get_current_user(token: str = Depends(oauth2_scheme)) -> Actor:
    payload = verify_token(token)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token is missing user claims")

    return Actor(
        user_id=user_id,
        email=normalize_user_key(email),
        name=payload.get("name") or email,
        avatar=payload.get("avatar"),
    )
