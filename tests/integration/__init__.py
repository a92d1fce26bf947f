"""Integration tests for components working together as a system.

Coverage:
    - POST /api/chat with real multipart requests through the FastAPI app
    - Upload staging, PDF extraction and temp file cleanup
    - Full turn from ConversationStore through ChatAPIClient to the API

Only the Gemini call is replaced, by a recording fake model client.
"""
