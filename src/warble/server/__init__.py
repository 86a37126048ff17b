"""Server — ASGI request/websocket pipelines, response sending, and uvicorn runner."""
