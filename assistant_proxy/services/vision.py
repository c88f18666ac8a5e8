# assistant_proxy/services/vision.py
import base64
import logging

from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

from assistant_proxy.core.prompts import TEXT_EXTRACTION_PROMPT

logger = logging.getLogger(__name__)


async def extract_text(vision_llm: ChatOpenAI, content: bytes, mime_type: str) -> str:
    """
    Uses the vision model to transcribe every visible piece of text in an image.

    Errors from the provider propagate to the caller.
    """
    encoded_string = base64.b64encode(content).decode("utf-8")

    msg = HumanMessage(
        content=[
            {"type": "text", "text": TEXT_EXTRACTION_PROMPT},
            {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded_string}"}},
        ]
    )

    logger.info("Sending %d image bytes to the vision model", len(content))
    res = await vision_llm.ainvoke([msg])

    text = res.content
    if isinstance(text, list):
        # Content blocks: keep only the text parts
        text = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in text
        )
    logger.info("Vision transcript received (%d chars)", len(text))
    return text.strip()
