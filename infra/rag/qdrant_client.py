import uuid
from functools import lru_cache
from typing import Dict, List, Optional

from qdrant_client import QdrantClient
from qdrant_client.models import Distance, PointStruct, VectorParams
from app.settings import settings

COLLECTION_TALENT = "talent_profiles"


@lru_cache
def get_client():
    if settings.QDRANT_URL == ":memory:":
        return QdrantClient(location=":memory:")
    return QdrantClient(url=settings.QDRANT_URL, api_key=settings.QDRANT_API_KEY or None)


def _ensure_payload_indexes(collection: str):
    c = get_client()
    for field, schema in [
        ("talent_id", "keyword"),
        ("location", "keyword"),
        ("gender_identity", "keyword"),
    ]:
        try:
            c.create_payload_index(
                collection_name=collection,
                field_name=field,
                field_schema=schema
            )
        except Exception:
            # already exists, or unsupported in local mode
            pass


def ensure_collection(name: str = COLLECTION_TALENT, vector_size: Optional[int] = None):
    c = get_client()
    names = {x.name for x in c.get_collections().collections}
    if name not in names:
        c.create_collection(collection_name=name, vectors_config=VectorParams(
            size=vector_size or settings.EMBEDDING_DIM, distance=Distance.COSINE))
    _ensure_payload_indexes(name)


def point_id_for(talent_id: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"talent::{talent_id}"))


def upsert_points(collection: str, vectors: List[List[float]], payloads: List[Dict]):
    points = [
        PointStruct(id=point_id_for(p["talent_id"]), vector=v, payload=p)
        for v, p in zip(vectors, payloads)
    ]
    get_client().upsert(collection_name=collection, points=points)


def search_top_k(
    collection: str,
    query_vector: List[float],
    k: int,
):
    res = get_client().query_points(
        collection_name=collection,
        query=query_vector,
        limit=k,
        with_payload=True,
    )
    return [{"payload": h.payload, "score": float(h.score)} for h in res.points]
