"""
Rotas do serviço de vídeo.
Upload, solicitação de processamento, consulta de status e download.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile, status
from fastapi.responses import RedirectResponse
from loguru import logger
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.application.dtos import (
    ApiResponseDTO,
    ErrorResponseDTO,
    ProcessVideoRequestDTO,
    UploadedFileDTO,
)
from src.application.use_cases import (
    GetProcessingStatsUseCase,
    GetVideoStatusUseCase,
    ProcessVideoUseCase,
    UploadVideoUseCase,
)
from src.domain.entities import VideoStatus
from src.domain.exceptions import UnauthorizedError
from src.presentation.api.dependencies import (
    CurrentUser,
    get_current_user,
    get_process_use_case,
    get_stats_use_case,
    get_upload_use_case,
    get_video_status_use_case,
)

router = APIRouter(prefix="/video", tags=["Videos"])

limiter = Limiter(key_func=get_remote_address)

ERROR_RESPONSES = {
    400: {"model": ErrorResponseDTO, "description": "Invalid request or video state"},
    401: {"model": ErrorResponseDTO, "description": "Missing user identity"},
    404: {"model": ErrorResponseDTO, "description": "Video not found"},
}


@router.post(
    "/upload",
    response_model=ApiResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload video for processing",
    responses=ERROR_RESPONSES,
)
@limiter.limit("10/minute")
async def upload_video(
    request: Request,
    video: UploadFile = File(..., description="Video file to upload"),
    user: CurrentUser = Depends(get_current_user),
    use_case: UploadVideoUseCase = Depends(get_upload_use_case),
) -> ApiResponseDTO:
    content = await video.read()
    uploaded = UploadedFileDTO(
        original_name=video.filename or "",
        mime_type=video.content_type or "application/octet-stream",
        size=len(content),
        content=content,
    )

    result = await use_case.execute(uploaded, user.id)

    logger.info(
        f"✅ Video uploaded: {result.id}",
        extra={"request_id": getattr(request.state, "request_id", None), "user_id": user.id}
    )
    return ApiResponseDTO(data=result, message="Video uploaded successfully")


@router.post(
    "/{video_id}/process",
    response_model=ApiResponseDTO,
    summary="Start video processing",
    responses=ERROR_RESPONSES,
)
@limiter.limit("20/minute")
async def process_video(
    request: Request,
    video_id: str,
    options: Optional[ProcessVideoRequestDTO] = Body(None),
    user: CurrentUser = Depends(get_current_user),
    use_case: ProcessVideoUseCase = Depends(get_process_use_case),
) -> ApiResponseDTO:
    result = await use_case.execute(
        video_id,
        user.id,
        request=options,
        user_tier=user.tier,
        user=user.to_profile(),
    )
    return ApiResponseDTO(data=result, message="Video processing started")


@router.get(
    "/stats",
    response_model=ApiResponseDTO,
    summary="Get processing statistics",
)
@limiter.limit("30/minute")
async def get_processing_stats(
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    use_case: GetProcessingStatsUseCase = Depends(get_stats_use_case),
) -> ApiResponseDTO:
    stats = await use_case.execute()
    return ApiResponseDTO(data=stats, message="Processing stats retrieved successfully")


@router.get(
    "/status/{video_status}",
    response_model=ApiResponseDTO,
    summary="List videos by status",
)
@limiter.limit("30/minute")
async def get_videos_by_status(
    request: Request,
    video_status: VideoStatus,
    limit: int = Query(50, ge=1, le=500),
    user: CurrentUser = Depends(get_current_user),
    use_case: GetVideoStatusUseCase = Depends(get_video_status_use_case),
) -> ApiResponseDTO:
    videos = await use_case.get_videos_by_status(video_status, limit)
    return ApiResponseDTO(data=videos, message="Videos retrieved successfully")


@router.get(
    "/user/{user_id}",
    response_model=ApiResponseDTO,
    summary="Get user videos",
    responses=ERROR_RESPONSES,
)
@limiter.limit("60/minute")
async def get_user_videos(
    request: Request,
    user_id: str,
    video_status: Optional[VideoStatus] = Query(None, alias="status"),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: CurrentUser = Depends(get_current_user),
    use_case: GetVideoStatusUseCase = Depends(get_video_status_use_case),
) -> ApiResponseDTO:
    if user_id != user.id:
        raise UnauthorizedError("Unauthorized to list videos of another user")

    result = await use_case.get_user_videos(
        user_id,
        status=video_status,
        page=offset // limit + 1,
        limit=limit,
    )
    return ApiResponseDTO(data=result, message="User videos retrieved successfully")


@router.get(
    "/{video_id}/status",
    response_model=ApiResponseDTO,
    summary="Get video processing status",
    responses=ERROR_RESPONSES,
)
@limiter.limit("60/minute")
async def get_video_status(
    request: Request,
    video_id: str,
    user: CurrentUser = Depends(get_current_user),
    use_case: GetVideoStatusUseCase = Depends(get_video_status_use_case),
) -> ApiResponseDTO:
    result = await use_case.get_video_by_id(video_id, user.id)
    return ApiResponseDTO(data=result, message="Video status retrieved successfully")


@router.get(
    "/{video_id}/download",
    response_model=ApiResponseDTO,
    summary="Get download URL for processed video frames",
    responses=ERROR_RESPONSES,
)
@limiter.limit("30/minute")
async def get_download_url(
    request: Request,
    video_id: str,
    user: CurrentUser = Depends(get_current_user),
    use_case: GetVideoStatusUseCase = Depends(get_video_status_use_case),
) -> ApiResponseDTO:
    result = await use_case.get_download_url(video_id, user.id)
    return ApiResponseDTO(data=result, message="Download URL generated successfully")


@router.get(
    "/{video_id}/download-redirect",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    summary="Download processed video frames (redirect to object store)",
    responses=ERROR_RESPONSES,
)
@limiter.limit("30/minute")
async def download_video(
    request: Request,
    video_id: str,
    user: CurrentUser = Depends(get_current_user),
    use_case: GetVideoStatusUseCase = Depends(get_video_status_use_case),
) -> RedirectResponse:
    result = await use_case.get_download_url(video_id, user.id)
    return RedirectResponse(result.download_url, status_code=status.HTTP_302_FOUND)
