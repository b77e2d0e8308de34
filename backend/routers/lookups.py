"""
Lookups router - similar place search and the audit log
"""
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from core.errors import InferenceError, LocationRequiredError
from core.utils import get_logger
from models import LogRecord, MessageResponse, SimilarPlaceRequest, SimilarPlaceResponse
from services.lookup_service import LookupService

logger = get_logger("lookups_router")
router = APIRouter()


def get_lookup_service(request: Request) -> LookupService:
    """Lookup service built at startup and kept on app.state"""
    return request.app.state.lookup_service


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=MessageResponse(message=message).model_dump())


@router.post(
    "/findSimilarPlace",
    response_model=SimilarPlaceResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}}
)
async def find_similar_place(
    request: SimilarPlaceRequest,
    background_tasks: BackgroundTasks,
    service: LookupService = Depends(get_lookup_service)
):
    """
    Find a place in a different part of the world with similar sunrise and sunset times.

    The log record is written after the response has been sent.
    """
    try:
        similar_place = await service.find_similar_place(request.user_location)
    except LocationRequiredError as e:
        return _message(400, str(e))
    except InferenceError as e:
        logger.error(f"Error generating content: {e}", exc_info=True)
        return _message(500, "Error generating content")

    background_tasks.add_task(service.record_lookup, request.user_location, similar_place)
    return SimilarPlaceResponse(similar_place=similar_place)


@router.get(
    "/logs",
    response_model=List[LogRecord],
    responses={500: {"model": MessageResponse}}
)
async def list_logs(service: LookupService = Depends(get_lookup_service)):
    """Every recorded lookup, oldest first"""
    try:
        return service.list_logs()
    except Exception as e:
        logger.error(f"Error reading logs: {e}", exc_info=True)
        return _message(500, "Error")
