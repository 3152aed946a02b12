# app/routers/users.py
"""Admin account management, super admins only."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.models.user import User
from app.repositories import UserRepository
from app.routers.deps import get_or_404, user_repo
from app.schemas.user import Role, UserCreate, UserUpdate
from app.serializers import page_payload, serialize_user
from app.utils.authz import require_super_admin
from app.utils.security import hash_password

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(
    page: int = Query(1),
    limit: int = Query(20),
    q: Optional[str] = Query(None),
    role: Optional[Role] = Query(None),
    include_inactive: bool = Query(False, alias="includeInactive"),
    _: User = Depends(require_super_admin),
    repo: UserRepository = Depends(user_repo),
):
    result = repo.list(page=page, limit=limit, q=q, include_inactive=include_inactive, role=role)
    return page_payload(result, [serialize_user(u) for u in result.items])


@router.get("/{item_id}")
def get_user(item_id: int, _: User = Depends(require_super_admin), repo: UserRepository = Depends(user_repo)):
    return serialize_user(get_or_404(repo, item_id))


@router.post("", status_code=201)
def create_user(
    payload: UserCreate,
    _: User = Depends(require_super_admin),
    repo: UserRepository = Depends(user_repo),
):
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=409, detail="Email already exists")
    data = payload.model_dump(exclude={"password"}, exclude_none=True)
    data["password_hash"] = hash_password(payload.password)
    data["provider"] = "local"
    return serialize_user(repo.create(data))


@router.put("/{item_id}")
def update_user(
    item_id: int,
    payload: UserUpdate,
    current: User = Depends(require_super_admin),
    repo: UserRepository = Depends(user_repo),
):
    user = get_or_404(repo, item_id)
    data = payload.to_data()
    if user.id == current.id and data.get("is_active") is False:
        raise HTTPException(status_code=403, detail="You cannot deactivate your own account")
    password = data.pop("password", None)
    if password:
        data["password_hash"] = hash_password(password)
    return serialize_user(repo.update(user, data))


@router.delete("/{item_id}")
def delete_user(
    item_id: int,
    current: User = Depends(require_super_admin),
    repo: UserRepository = Depends(user_repo),
):
    user = get_or_404(repo, item_id)
    if user.id == current.id:
        raise HTTPException(status_code=403, detail="You cannot delete your own account")
    repo.delete(user)
    return {"message": "Deleted"}
