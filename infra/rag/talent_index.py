import logging
from typing import Dict, List

from infra.rag.embeddings import embed_texts_openai
from infra.rag.qdrant_client import COLLECTION_TALENT, ensure_collection, search_top_k, upsert_points

logger = logging.getLogger(__name__)

BATCH_SIZE = 64


async def upsert_talents(entries: List[Dict]) -> int:
    """Embed and store talent entries.

    Each entry carries ``talent_id`` and ``text``; any other keys
    (location, gender_identity...) go into the point payload as-is.
    """
    if not entries:
        return 0
    ensure_collection(COLLECTION_TALENT)
    total = 0
    for start in range(0, len(entries), BATCH_SIZE):
        batch = entries[start:start + BATCH_SIZE]
        vectors = await embed_texts_openai([e["text"] for e in batch])
        payloads = [{k: v for k, v in e.items() if k != "text"} for e in batch]
        upsert_points(COLLECTION_TALENT, vectors, payloads)
        total += len(batch)
    logger.info(f"Upserted {total} talent profiles into {COLLECTION_TALENT}")
    return total


async def search_talent(query: str, k: int) -> List[Dict]:
    """Talent ids ranked by similarity to ``query``, best first."""
    ensure_collection(COLLECTION_TALENT)
    vectors = await embed_texts_openai([query])
    hits = search_top_k(COLLECTION_TALENT, vectors[0], k)
    return [
        {"talent_id": h["payload"]["talent_id"], "score": h["score"]}
        for h in hits
        if h["payload"] and h["payload"].get("talent_id")
    ]
