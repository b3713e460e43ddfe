"""
Rotas do serviço de notificações.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.application.dtos import ApiResponseDTO, ErrorResponseDTO, SendNotificationRequestDTO
from src.application.use_cases import GetNotificationsUseCase, SendNotificationUseCase
from src.presentation.api.dependencies import (
    get_notifications_use_case,
    get_send_notification_use_case,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])

limiter = Limiter(key_func=get_remote_address)


@router.post(
    "/send",
    response_model=ApiResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Send a notification",
    responses={
        400: {"model": ErrorResponseDTO, "description": "Invalid request data"},
        404: {"model": ErrorResponseDTO, "description": "User not found"},
        503: {"model": ErrorResponseDTO, "description": "Delivery failed"},
    },
)
@limiter.limit("60/minute")
async def send_notification(
    request: Request,
    notification: SendNotificationRequestDTO,
    use_case: SendNotificationUseCase = Depends(get_send_notification_use_case),
) -> ApiResponseDTO:
    result = await use_case.execute(notification)
    return ApiResponseDTO(data=result, message="Notification sent successfully")


@router.get(
    "/user/{user_id}",
    response_model=ApiResponseDTO,
    summary="Get user notifications",
)
@limiter.limit("60/minute")
async def get_user_notifications(
    request: Request,
    user_id: str,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    use_case: GetNotificationsUseCase = Depends(get_notifications_use_case),
) -> ApiResponseDTO:
    result = await use_case.get_user_notifications(user_id, limit=limit, offset=offset)
    return ApiResponseDTO(data=result, message="Notifications retrieved successfully")


@router.get(
    "/{notification_id}",
    response_model=ApiResponseDTO,
    summary="Get notification by ID",
    responses={404: {"model": ErrorResponseDTO, "description": "Notification not found"}},
)
@limiter.limit("60/minute")
async def get_notification(
    request: Request,
    notification_id: str,
    use_case: GetNotificationsUseCase = Depends(get_notifications_use_case),
) -> ApiResponseDTO:
    result = await use_case.get_by_id(notification_id)
    return ApiResponseDTO(data=result, message="Notification found")
