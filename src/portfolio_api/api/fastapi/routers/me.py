from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from portfolio_api.auth import Identity, require_identity
from portfolio_api.db.nosql import USERS, ResourceStore

from ..encoding import encode
from ..mongo import store_dependency

router = APIRouter(prefix="/me", tags=["me"])

get_users_store = store_dependency(USERS)


@router.get("")
async def get_me(
    identity: Identity = Depends(require_identity),
    store: ResourceStore = Depends(get_users_store),
):
    user = await store.get_by_identifier(identity.uid)
    if user is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "User not found"})
    return encode(user)


@router.put("")
async def update_me(
    payload: dict[str, Any] = Body(...),
    identity: Identity = Depends(require_identity),
    store: ResourceStore = Depends(get_users_store),
):
    # a caller may not re-key their own profile
    changes = {k: v for k, v in payload.items() if k != USERS.custom_id_field}
    result = await store.update_by_identifier(identity.uid, changes)
    if result.matched == 0:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "User not found"})
    return encode(await store.get_by_identifier(identity.uid))
