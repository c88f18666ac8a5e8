# assistant_proxy/config.py
import os
from dotenv import load_dotenv

load_dotenv(override=True)

# --- SERVER CONFIG ---
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8001))
RELOAD = os.environ.get("RELOAD", "false").lower() in {"1", "true", "yes", "on"}
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# --- OPENAI ---
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")

# Fixed provider identifiers, never negotiated at runtime
VECTOR_STORE_ID = os.environ.get("VECTOR_STORE_ID", "vs_69050fe6e43c8191be28bac47c3f565f")
ASSISTANT_ID = os.environ.get("ASSISTANT_ID", "")

# --- FILE UPLOAD ---
FILE_PURPOSE = "assistants"
STREAM_THRESHOLD_BYTES = 5 * 1024 * 1024  # 5 MiB
STREAM_FLAG_VALUES = {"1", "true", "yes", "on"}

# --- LLM MODELS ---
VISION_MODEL = os.environ.get("VISION_MODEL", "gpt-4o-mini")
VISION_MAX_TOKENS = int(os.environ.get("VISION_MAX_TOKENS", 1000))
