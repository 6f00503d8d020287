"""
Assistant Endpoints.
Transcription, inventory-grounded chat and speech synthesis.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response
from starlette.datastructures import UploadFile

from autovoice.core.conversation import AUDIO_MEDIA_TYPE
from autovoice.core.exceptions import BadInputException

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise BadInputException("Invalid request body")


@router.post("/transcribe")
async def transcribe(request: Request):
    """
    Transcribe a recording.

    Accepts multipart/form-data with the recording in the `audio` field.
    """
    orchestrator = request.app.state.orchestrator
    orchestrator.ensure_configured()

    form = await request.form()
    audio_file = form.get("audio")

    if not isinstance(audio_file, UploadFile):
        raise BadInputException("No audio file provided")

    audio_data = await audio_file.read()
    text = await orchestrator.transcribe(
        audio_data,
        filename=audio_file.filename or "recording.webm"
    )

    return {"text": text}


@router.post("/chat")
async def chat(request: Request):
    """
    Get the assistant's reply to a new message.

    Body:
    {
        "messages": [{"id": "...", "role": "user", "content": "...", "timestamp": 1700000000000}],
        "userMessage": "Do you have any electric cars?"
    }

    The reply carries `audioUrl` (a base64 MP3 data URI) unless speech
    synthesis failed.
    """
    orchestrator = request.app.state.orchestrator
    orchestrator.ensure_configured()

    payload = await _read_json(request)
    result = await orchestrator.chat_request(payload)

    return result.to_dict()


@router.post("/tts")
async def text_to_speech(request: Request):
    """
    Synthesize speech.

    Body: {"text": "Hello there"}
    Returns raw MP3 bytes.
    """
    orchestrator = request.app.state.orchestrator
    orchestrator.ensure_configured()

    payload = await _read_json(request)
    text = payload.get("text") if isinstance(payload, dict) else None

    audio = await orchestrator.synthesize(text)

    return Response(content=audio, media_type=AUDIO_MEDIA_TYPE)
