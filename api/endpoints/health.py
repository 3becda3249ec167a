from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from app.settings import settings
from infra.db.session import engine
from infra.rag.qdrant_client import COLLECTION_TALENT, get_client

router = APIRouter(prefix="/health")


@router.get("")
def health():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return {"status": "ok", "env": settings.ENV}


@router.get("/vector-db")
def vector_db_health():
    client = get_client()
    try:
        collections = client.get_collections()
    except Exception as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    names = [col.name for col in collections.collections]
    return {
        "status": "ok",
        "index_enabled": settings.TALENT_INDEX_ENABLED,
        "collections": names,
        "talent_collection_ready": COLLECTION_TALENT in names,
    }
