# assistant_proxy/api/routes/threads.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from openai import AsyncOpenAI
from pydantic import BaseModel

from assistant_proxy.dependencies import get_openai
from assistant_proxy.services.assistant import create_thread, start_run

router = APIRouter()


class MessageRequest(BaseModel):
    content: str = ""


@router.post("/api/assistants/threads")
async def create_thread_endpoint(client: AsyncOpenAI = Depends(get_openai)):
    """Create a new conversation thread."""
    return {"threadId": await create_thread(client)}


@router.post("/api/assistants/threads/{thread_id}/messages")
async def send_message(thread_id: str, request: MessageRequest, client: AsyncOpenAI = Depends(get_openai)):
    """Post a user message and stream the assistant run back."""
    if not request.content.strip():
        raise HTTPException(400, "content is required")

    events = await start_run(client, thread_id, request.content)
    return StreamingResponse(events, media_type="application/x-ndjson")
