from fastapi import Depends, HTTPException, Request

from coursehub.repositories.user_repository import UserRepository


def require_user(request: Request) -> str:
    """user_id resolved by the session middleware, or 401."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return str(user_id)


def require_educator(user_id: str = Depends(require_user)) -> str:
    user = UserRepository().find_by_id(user_id)
    if not user or user.get("role") != "educator":
        raise HTTPException(status_code=403, detail="Unauthorized Access")
    return user_id
