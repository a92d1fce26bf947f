"""Problem Solver Chat - an engineering assistant backed by Google Gemini.

Combines FastAPI for the chat endpoint, google-genai for model access,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoint and upload handling
    - assistant: prompt assembly and model invocation
    - parsing: PDF text extraction
    - ui: conversation state and web interface
    - models: Request/response schemas
"""

__version__ = "0.1.0"
