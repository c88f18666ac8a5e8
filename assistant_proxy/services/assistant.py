# assistant_proxy/services/assistant.py
import logging
from typing import AsyncIterator

from fastapi import HTTPException
from openai import AsyncOpenAI

from assistant_proxy.config import ASSISTANT_ID

logger = logging.getLogger(__name__)


async def create_thread(client: AsyncOpenAI) -> str:
    """Create an empty conversation thread and return its id."""
    try:
        thread = await client.beta.threads.create()
    except Exception:
        logger.exception("❌ Error creating thread")
        raise HTTPException(500, "Error creating thread")

    logger.info("🧵 Created thread %s", thread.id)
    return thread.id


async def start_run(client: AsyncOpenAI, thread_id: str, content: str) -> AsyncIterator[str]:
    """
    Append a user message to the thread and start a streamed file-search run.

    Returns an iterator of run events, one JSON document per line.
    """
    try:
        await client.beta.threads.messages.create(thread_id, role="user", content=content)
        stream = await client.beta.threads.runs.create(
            thread_id,
            assistant_id=ASSISTANT_ID,
            tools=[{"type": "file_search"}],
            stream=True,
        )
    except Exception:
        logger.exception("❌ Error starting run on thread %s", thread_id)
        raise HTTPException(500, "Error sending message")

    logger.info("💬 Run started on thread %s", thread_id)

    async def event_generator():
        try:
            async for event in stream:
                yield event.model_dump_json() + "\n"
        except Exception as e:
            logger.error("Stream error on thread %s: %s", thread_id, e)
        finally:
            await stream.close()

    return event_generator()
