"""Unit tests for individual components in isolation.

Coverage:
    - assistant/: configuration, prompt parts, assembler, Gemini client
    - parsing/: PDF text extraction
    - ui/: conversation store and markdown rendering

Uses mocks for google-genai and a fake model client for the assembler.
Leverages pytest-check for multiple assertions per test.
"""
