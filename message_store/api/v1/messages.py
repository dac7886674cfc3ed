from uuid import UUID

from fastapi import APIRouter, Depends, status

from message_store.api.v1.schemas import CreateMessageRequestSchema, ErrorResponseSchema, MessageResponseSchema
from message_store.application.use_cases.create_message import CreateMessageUseCase
from message_store.application.use_cases.get_message import GetMessageUseCase
from message_store.wiring.dependencies import get_create_message_use_case, get_message_use_case

router = APIRouter()

_error_responses = {
    400: {"model": ErrorResponseSchema},
    503: {"model": ErrorResponseSchema},
}


@router.post(
    "/messages",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses,
)
def create_message(
    req: CreateMessageRequestSchema,
    uc: CreateMessageUseCase = Depends(get_create_message_use_case),
):
    message = uc.execute(
        sender_id=req.sender_id,
        receiver_id=req.receiver_id,
        msg_body=req.msg_body,
        msg_type=req.msg_type,
    )
    return MessageResponseSchema.from_entity(message)


@router.get(
    "/messages/{receiver_id}/{message_id}",
    response_model=MessageResponseSchema,
    responses={**_error_responses, 404: {"model": ErrorResponseSchema}},
)
def get_message(
    receiver_id: UUID,
    message_id: UUID,
    uc: GetMessageUseCase = Depends(get_message_use_case),
):
    # MessageNotFoundError and MessageStoreError are mapped by the app's exception handlers.
    message = uc.execute(message_id=message_id, receiver_id=receiver_id)
    return MessageResponseSchema.from_entity(message)
