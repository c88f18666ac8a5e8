# assistant_proxy/server.py
import uvicorn

from assistant_proxy.config import HOST, LOG_LEVEL, PORT, RELOAD


def main():
    """Serve the assistant files proxy with uvicorn."""
    uvicorn.run(
        "assistant_proxy.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,  # Hot reload for development only
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
