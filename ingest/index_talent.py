import asyncio
import logging

from app.logging import configure_logging
from domain.services.profiles import index_one_talent, reindex_all_talent
from infra.db.session import init_db
from infra.rag.qdrant_client import COLLECTION_TALENT, get_client

log = logging.getLogger("index_talent")


async def main(user_id: str | None = None, recreate: bool = False):
    init_db()
    if recreate:
        client = get_client()
        if client.collection_exists(COLLECTION_TALENT):
            client.delete_collection(COLLECTION_TALENT)
            log.info(f"Dropped collection {COLLECTION_TALENT}")

    if user_id:
        await index_one_talent(user_id)
        log.info(f"Re-indexed talent {user_id}")
        return
    count = await reindex_all_talent()
    log.info(f"Indexed {count} talent profiles into {COLLECTION_TALENT}")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(
        description="Embed talent profiles into the Qdrant talent index")
    parser.add_argument("--user-id", default=None,
                        help="Only re-index this talent")
    parser.add_argument("--recreate", action="store_true",
                        help="Drop the collection before indexing")
    args = parser.parse_args()
    configure_logging()
    asyncio.run(main(args.user_id, args.recreate))
