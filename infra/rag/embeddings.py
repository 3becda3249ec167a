from typing import List

from app.settings import settings
from domain.errors import LLMNotConfiguredError, LLMResponseError
from infra.llm.client import _post_with_retries

OPENAI_EMBEDDINGS_URL = "https://api.openai.com/v1/embeddings"


async def embed_texts_openai(texts: List[str]) -> List[List[float]]:
    if not texts:
        return []
    if not settings.OPENAI_API_KEY:
        raise LLMNotConfiguredError("OPENAI_API_KEY is required for talent search embeddings")
    headers = {"Authorization": f"Bearer {settings.OPENAI_API_KEY}"}
    payload = {"model": settings.OPENAI_EMBEDDING_MODEL, "input": texts}
    data = await _post_with_retries(OPENAI_EMBEDDINGS_URL, headers, payload)
    items = sorted(data.get("data") or [], key=lambda item: item.get("index", 0))
    if len(items) != len(texts):
        raise LLMResponseError(f"Expected {len(texts)} embeddings, got {len(items)}")
    return [item["embedding"] for item in items]
