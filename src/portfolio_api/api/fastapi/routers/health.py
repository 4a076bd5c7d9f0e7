from fastapi import APIRouter, Depends, Response, status

from portfolio_api.db.nosql.mongo import MongoConnection, mongo_healthcheck

from ..mongo import get_connection

router = APIRouter(tags=["internal"])


@router.get("/ping", include_in_schema=False)
async def ping():
    return {"status": "ok"}


@router.get("/_db/health", include_in_schema=False)
async def db_health(conn: MongoConnection = Depends(get_connection)):
    ok = await mongo_healthcheck(conn)
    return Response(
        status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE
    )
