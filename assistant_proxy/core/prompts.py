# assistant_proxy/core/prompts.py

TEXT_EXTRACTION_PROMPT = (
    "Extract all visible text from this image verbatim. "
    "Return plain text only, preserving line breaks and reading order. "
    "Do not add commentary, markdown, or descriptions of non-text content."
)
