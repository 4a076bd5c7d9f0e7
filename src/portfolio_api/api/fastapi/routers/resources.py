from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from portfolio_api.auth import Identity, require_identity
from portfolio_api.db.nosql import ResourceKind, ResourceStore

from ..encoding import encode
from ..mongo import store_dependency


def _not_found(kind: ResourceKind) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": f"{kind.label} not found"},
    )


def resource_router(kind: ResourceKind) -> APIRouter:
    """CRUD routes for one resource kind; writes need a verified caller."""
    router = APIRouter(prefix=f"/{kind.name}", tags=[kind.name])
    get_store = store_dependency(kind)

    @router.get("", name=f"list_{kind.name}")
    async def list_resources(store: ResourceStore = Depends(get_store)):
        return encode(await store.list())

    @router.get("/{identifier}", name=f"get_{kind.singular}")
    async def get_resource(identifier: str, store: ResourceStore = Depends(get_store)):
        document = await store.get_by_identifier(identifier)
        if document is None:
            return _not_found(kind)
        return encode(document)

    @router.post("", status_code=status.HTTP_201_CREATED, name=f"create_{kind.singular}")
    async def create_resource(
        payload: dict[str, Any] = Body(...),
        store: ResourceStore = Depends(get_store),
        _identity: Identity = Depends(require_identity),
    ):
        inserted_id = await store.create(payload)
        return {
            "message": f"{kind.label} created successfully",
            "insertedId": str(inserted_id),
        }

    @router.put("/{identifier}", name=f"update_{kind.singular}")
    async def update_resource(
        identifier: str,
        payload: dict[str, Any] = Body(...),
        store: ResourceStore = Depends(get_store),
        _identity: Identity = Depends(require_identity),
    ):
        result = await store.update_by_identifier(identifier, payload)
        if result.matched == 0:
            return _not_found(kind)
        return {
            "message": f"{kind.label} updated successfully",
            "matchedCount": result.matched,
            "modifiedCount": result.modified,
        }

    @router.delete("/{identifier}", name=f"delete_{kind.singular}")
    async def delete_resource(
        identifier: str,
        store: ResourceStore = Depends(get_store),
        _identity: Identity = Depends(require_identity),
    ):
        result = await store.delete_by_identifier(identifier)
        if result.deleted == 0:
            return _not_found(kind)
        return {
            "message": f"{kind.label} deleted successfully",
            "deletedCount": result.deleted,
        }

    return router
