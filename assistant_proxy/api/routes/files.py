# assistant_proxy/api/routes/files.py
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import PlainTextResponse
from langchain_openai import ChatOpenAI
from openai import AsyncOpenAI

from assistant_proxy.config import STREAM_FLAG_VALUES
from assistant_proxy.dependencies import get_openai, get_vision_llm
from assistant_proxy.services.file_processor import process_upload
from assistant_proxy.services.vector_store import delete_file, get_file_status, list_files

router = APIRouter()


@router.post("/api/assistants/files")
async def upload_file(
    file: UploadFile | None = File(None),
    stream: str | None = None,
    client: AsyncOpenAI = Depends(get_openai),
    vision_llm: ChatOpenAI = Depends(get_vision_llm),
):
    """Upload a file and attach it to the vector store."""
    # A bare `?stream` counts as set
    stream_requested = stream is not None and (stream == "" or stream.strip().lower() in STREAM_FLAG_VALUES)
    return await process_upload(file, client, vision_llm, stream_requested)


@router.get("/api/assistants/files")
async def get_files(fileId: str | None = None, client: AsyncOpenAI = Depends(get_openai)):
    """List the vector store files, or the status of one file."""
    if fileId:
        return await get_file_status(client, fileId)
    return await list_files(client)


@router.delete("/api/assistants/files", response_class=PlainTextResponse)
async def remove_file(request: Request, client: AsyncOpenAI = Depends(get_openai)):
    """Detach a file from the vector store."""
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(400, "Invalid JSON body")

    file_id = body.get("fileId") if isinstance(body, dict) else None
    if not file_id:
        raise HTTPException(400, "fileId is required")

    return await delete_file(client, file_id)
