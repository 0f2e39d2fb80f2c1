from fastapi import Request

from app.gateway import CommentGateway


def get_gateway(request: Request) -> CommentGateway:
    """
    FastAPI dependency returning the process-wide ``CommentGateway``.

    The gateway is created once by ``create_app`` and stored on
    ``app.state``; handlers receive it by reference instead of importing
    a global.
    """
    return request.app.state.gateway
