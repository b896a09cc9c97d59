from fastapi import APIRouter

from quizhub.core import database

health_router = APIRouter()


@health_router.get("/health")
async def health():
    connected = await database.ping()
    return {"status": "ok", "database": "connected" if connected else "disconnected"}
