# assistant_proxy/dependencies.py
"""
Shared dependencies and global state management.
"""
from fastapi import HTTPException
from langchain_openai import ChatOpenAI
from openai import AsyncOpenAI

# Global instances (initialized in lifespan)
openai_client: AsyncOpenAI | None = None
vision_llm: ChatOpenAI | None = None


def get_openai() -> AsyncOpenAI:
    """Get the OpenAI client instance."""
    if openai_client is None:
        raise HTTPException(503, "OpenAI client not initialized")
    return openai_client


def get_vision_llm() -> ChatOpenAI:
    """Get the vision chat model instance."""
    if vision_llm is None:
        raise HTTPException(503, "Vision model not initialized")
    return vision_llm


def set_openai(client: AsyncOpenAI | None):
    """Set the OpenAI client instance."""
    global openai_client
    openai_client = client


def set_vision_llm(llm: ChatOpenAI | None):
    """Set the vision chat model instance."""
    global vision_llm
    vision_llm = llm
