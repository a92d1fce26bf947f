"""NiceGUI interface - landing screen and problem-solving workbench.

Responsibilities:
    - Conversation state for the lifetime of one page session
    - Single PDF or image attachment per turn
    - Model tier toggle (Flash / Pro)
    - Markdown answers with KaTeX-rendered formulas

Talks to the chat API over HTTP and holds no server-side state.
"""
