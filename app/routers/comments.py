from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app import transport
from app.dependencies import get_gateway
from app.gateway import CommentGateway
from app.schemas import CommentResponse, ErrorResponse

router = APIRouter(prefix="/comments", tags=["comments"])

_ERRORS = {500: {"model": ErrorResponse}}


@router.get("", response_model=list[CommentResponse], responses=_ERRORS)
async def list_comments(gateway: CommentGateway = Depends(get_gateway)):
    reply = await transport.handle_list(gateway)
    return JSONResponse(status_code=reply.status_code, content=reply.body)


# The body is read raw so validation (and its 400 answer) stays in the
# transport chain instead of FastAPI's automatic 422.
@router.post(
    "",
    status_code=201,
    response_model=CommentResponse,
    responses={400: {"model": ErrorResponse}, **_ERRORS},
)
async def create_comment(request: Request, gateway: CommentGateway = Depends(get_gateway)):
    reply = await transport.handle_create(gateway, await request.body())
    return JSONResponse(status_code=reply.status_code, content=reply.body)
