# assistant_proxy/services/vector_store.py
import logging

from fastapi import HTTPException
from openai import AsyncOpenAI, NotFoundError

from assistant_proxy.config import VECTOR_STORE_ID

logger = logging.getLogger(__name__)


async def remove_association(client: AsyncOpenAI, file_id: str) -> bool:
    """
    Detach a file from the fixed vector store.

    Returns False when the association was already gone.
    """
    try:
        await client.vector_stores.files.delete(file_id=file_id, vector_store_id=VECTOR_STORE_ID)
    except NotFoundError:
        return False
    return True


async def _describe(client: AsyncOpenAI, file_id: str) -> dict:
    file_details = await client.files.retrieve(file_id)
    vector_file = await client.vector_stores.files.retrieve(file_id=file_id, vector_store_id=VECTOR_STORE_ID)
    return {
        "file_id": file_id,
        "filename": file_details.filename,
        "status": vector_file.status,
    }


async def list_files(client: AsyncOpenAI) -> list[dict]:
    """
    List every file attached to the fixed vector store.

    Associations whose backing file no longer exists are removed once the
    listing has finished, so the pagination cursor never points at a
    deleted entry.
    """
    files = []
    stale = []
    try:
        async for vector_file in client.vector_stores.files.list(vector_store_id=VECTOR_STORE_ID):
            try:
                files.append(await _describe(client, vector_file.id))
            except NotFoundError:
                stale.append(vector_file.id)
            except Exception as e:
                logger.warning("⚠️ Could not fetch details for file %s: %s", vector_file.id, e)
    except NotFoundError:
        logger.warning("⚠️ Vector store %s does not exist or is not accessible", VECTOR_STORE_ID)
        return []
    except Exception:
        logger.exception("❌ Error listing files")
        raise HTTPException(500, "Error listing files")

    for file_id in stale:
        logger.info("🧹 Removing stale file %s from vector store", file_id)
        try:
            await remove_association(client, file_id)
        except Exception as e:
            logger.warning("⚠️ Could not remove stale file %s: %s", file_id, e)

    if not files:
        logger.info("No files in vector store %s", VECTOR_STORE_ID)
    return files


async def get_file_status(client: AsyncOpenAI, file_id: str) -> dict:
    """Status of one file in the fixed vector store, including the last indexing error."""
    try:
        vector_file = await client.vector_stores.files.retrieve(file_id=file_id, vector_store_id=VECTOR_STORE_ID)
    except NotFoundError:
        raise HTTPException(404, f"File {file_id} not found")
    except Exception:
        logger.exception("❌ Error retrieving vector store file %s", file_id)
        raise HTTPException(500, "Error retrieving file")

    try:
        file_details = await client.files.retrieve(file_id)
    except NotFoundError:
        logger.info("🧹 Removing stale file %s from vector store", file_id)
        try:
            await remove_association(client, file_id)
        except Exception as e:
            logger.warning("⚠️ Could not remove stale file %s: %s", file_id, e)
        raise HTTPException(404, f"File {file_id} not found")
    except Exception:
        logger.exception("❌ Error retrieving file %s", file_id)
        raise HTTPException(500, "Error retrieving file")

    last_error = None
    if vector_file.last_error is not None:
        last_error = {
            "code": vector_file.last_error.code,
            "message": vector_file.last_error.message,
        }

    return {
        "file_id": file_id,
        "filename": file_details.filename,
        "status": vector_file.status,
        "last_error": last_error,
    }


async def delete_file(client: AsyncOpenAI, file_id: str) -> str:
    """Detach a file from the fixed vector store. Deleting a missing file succeeds."""
    try:
        removed = await remove_association(client, file_id)
    except Exception:
        logger.exception("❌ Error deleting file %s", file_id)
        raise HTTPException(500, "Error deleting file")

    if not removed:
        logger.warning("⚠️ File %s does not exist, nothing to delete", file_id)
        return "File already absent"

    logger.info("🗑️ File %s removed from vector store %s", file_id, VECTOR_STORE_ID)
    return "File deleted"
