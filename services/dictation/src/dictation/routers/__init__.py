"""HTTP and WebSocket routers for the Memoria dictation service."""
