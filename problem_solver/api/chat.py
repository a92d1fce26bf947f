"""Chat endpoint.

Accepts a multipart form with the user's message, the model tier and an
optional attachment, and returns the assistant's answer as JSON.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from problem_solver.api.uploads import stage_upload
from problem_solver.assistant.assembler import PromptAssembler
from problem_solver.assistant.prompt import ModelTier, PromptRequest
from problem_solver.models.schemas import ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

FAILURE_MESSAGE = "Failed to process request"


def _failure_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=FAILURE_MESSAGE).model_dump(),
    )


def get_prompt_assembler(request: Request) -> PromptAssembler | None:
    """Return the assembler created at startup, if configuration allowed it."""
    return getattr(request.app.state, "prompt_assembler", None)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
)
async def chat(
    message: str = Form(""),
    model: str = Form("flash"),
    file: UploadFile | None = File(None),
    assembler: PromptAssembler | None = Depends(get_prompt_assembler),
) -> ChatResponse | JSONResponse:
    """Answer one chat turn.

    Args:
        message: The user's question (may be empty when a file is attached).
        model: "pro" for the advanced model, anything else for the fast one.
        file: Optional PDF or image attachment.
        assembler: Prompt assembler created at startup.

    Returns:
        ChatResponse with the answer, or a 500 error body on any failure.
    """
    if assembler is None:
        logger.error("Chat request received but the assistant is not configured")
        return _failure_response()

    attachment = None
    if file is not None and file.filename:
        try:
            attachment = await stage_upload(
                file,
                assembler.config.upload_dir,
                assembler.config.max_upload_bytes,
            )
        except HTTPException as e:
            return JSONResponse(
                status_code=e.status_code,
                content=ErrorResponse(error=str(e.detail)).model_dump(),
            )
        except OSError:
            logger.exception("Failed to stage upload")
            return _failure_response()

    prompt_request = PromptRequest(
        user_text=message,
        model_tier=ModelTier.from_form_value(model),
        attachment=attachment,
    )

    try:
        text = await assembler.build_and_invoke(prompt_request)
    except Exception:
        logger.exception("Failed to process chat request")
        return _failure_response()

    return ChatResponse(text=text)
