"""HTTP client for the chat endpoint."""

import os

import httpx

from problem_solver.ui.conversation import PendingAttachment

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class ChatRequestError(Exception):
    """Raised when the chat endpoint cannot be reached or reports failure."""


class ChatAPIClient:
    """Sends chat turns to ``POST /api/chat`` as multipart forms."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    async def send_chat(
        self,
        message: str,
        model: str,
        attachment: PendingAttachment | None = None,
    ) -> str:
        """Send one turn and return the assistant's text.

        Raises:
            ChatRequestError: On transport errors, non-2xx statuses or an
                unexpected response body.
        """
        data = {"message": message, "model": model}
        files = None
        if attachment is not None:
            files = {"file": (attachment.name, attachment.content, attachment.mime_type)}

        if self._http_client is not None:
            return await self._post(self._http_client, data, files)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._post(client, data, files)

    async def _post(
        self,
        client: httpx.AsyncClient,
        data: dict[str, str],
        files: dict[str, tuple[str, bytes, str]] | None,
    ) -> str:
        try:
            response = await client.post(
                f"{self._base_url}/api/chat", data=data, files=files
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ChatRequestError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ChatRequestError(f"Connection failed: {e}") from e

        try:
            text = response.json()["text"]
        except (ValueError, KeyError, TypeError) as e:
            raise ChatRequestError(f"Unexpected response: {e}") from e
        if not isinstance(text, str):
            raise ChatRequestError("Unexpected response: text is not a string")
        return text
