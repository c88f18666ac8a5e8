# assistant_proxy/services/file_processor.py
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, IO, Tuple, Union

from fastapi import HTTPException, UploadFile
from langchain_openai import ChatOpenAI
from openai import AsyncOpenAI

from assistant_proxy.config import FILE_PURPOSE, STREAM_THRESHOLD_BYTES, VECTOR_STORE_ID
from assistant_proxy.services.vision import extract_text

logger = logging.getLogger(__name__)

IMAGE = "image"
BUFFERED = "buffered"
STREAMED = "streamed"

# (filename, content, mime type) as accepted by the OpenAI files API
Payload = Tuple[str, Union[bytes, IO[bytes]], str]


@dataclass(frozen=True)
class UploadPlan:
    kind: str
    filename: str
    mime_type: str


def transcript_filename(filename: str) -> str:
    """Replace the extension of an image name with `.txt`."""
    stem, _ = os.path.splitext(filename)
    return f"{stem}.txt"


def classify_upload(filename: str, mime_type: str | None, size: int, stream_requested: bool = False) -> UploadPlan:
    """
    Decide how an upload reaches the provider. Pure, no I/O.

    Images are transcribed to text first. Everything else is streamed when the
    caller asks for it or the file is larger than the threshold, and buffered
    otherwise.
    """
    mime_type = mime_type or "application/octet-stream"

    if mime_type.lower().startswith("image/"):
        return UploadPlan(IMAGE, transcript_filename(filename), "text/plain")

    if stream_requested or size > STREAM_THRESHOLD_BYTES:
        return UploadPlan(STREAMED, filename, mime_type)

    return UploadPlan(BUFFERED, filename, mime_type)


def upload_size(file: UploadFile) -> int:
    """Size in bytes of an upload, measured from the spooled file if not declared."""
    if file.size is not None:
        return file.size
    position = file.file.tell()
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(position)
    return size


async def _prepare_image(file: UploadFile, plan: UploadPlan, vision_llm: ChatOpenAI) -> Payload:
    image_bytes = await file.read()
    text = await extract_text(vision_llm, image_bytes, file.content_type)
    return (plan.filename, text.encode("utf-8"), plan.mime_type)


async def _prepare_buffered(file: UploadFile, plan: UploadPlan, vision_llm: ChatOpenAI) -> Payload:
    return (plan.filename, await file.read(), plan.mime_type)


async def _prepare_streamed(file: UploadFile, plan: UploadPlan, vision_llm: ChatOpenAI) -> Payload:
    # The HTTP client reads the spooled file in chunks while sending
    await file.seek(0)
    return (plan.filename, file.file, plan.mime_type)


PREPARERS: dict[str, Callable[[UploadFile, UploadPlan, ChatOpenAI], Awaitable[Payload]]] = {
    IMAGE: _prepare_image,
    BUFFERED: _prepare_buffered,
    STREAMED: _prepare_streamed,
}


async def process_upload(
    file: UploadFile | None,
    client: AsyncOpenAI,
    vision_llm: ChatOpenAI,
    stream_requested: bool = False,
) -> dict:
    """Upload a file to provider storage and attach it to the fixed vector store."""
    if file is None or not file.filename:
        raise HTTPException(400, "No file provided")

    plan = classify_upload(file.filename, file.content_type, upload_size(file), stream_requested)
    logger.info("📂 Uploading %s as %s (%s)", file.filename, plan.filename, plan.kind)

    try:
        payload = await PREPARERS[plan.kind](file, plan, vision_llm)

        openai_file = await client.files.create(file=payload, purpose=FILE_PURPOSE)
        vector_file = await client.vector_stores.files.create(
            vector_store_id=VECTOR_STORE_ID,
            file_id=openai_file.id,
        )
    except Exception:
        logger.exception("❌ Error uploading file %s", file.filename)
        raise HTTPException(500, "Error uploading file")

    logger.info("✅ File %s added to vector store %s", openai_file.filename, VECTOR_STORE_ID)
    return {
        "message": "File uploaded successfully",
        "file_id": openai_file.id,
        "filename": openai_file.filename,
        "vector_file_id": vector_file.id,
        "status": vector_file.status,
    }
