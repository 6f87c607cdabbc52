"""Chat API endpoints."""

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import JSONResponse

from chat_widget.core.rate_limiter import chat_rate_limit, limiter, use_app_rate_limit

from .models import ProxyResult
from .service import ChatProxyHandler, get_chat_proxy

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _to_response(result: ProxyResult) -> JSONResponse:
    response = JSONResponse(status_code=result.status_code, content=result.body)
    cookie = result.session_cookie
    if cookie:
        response.set_cookie(
            key=cookie.name,
            value=cookie.value,
            max_age=cookie.max_age,
            path=cookie.path,
            secure=cookie.secure,
            httponly=cookie.httponly,
            samesite=cookie.samesite,
        )
    return response


@router.post("/message", dependencies=[Depends(use_app_rate_limit)])
@limiter.limit(chat_rate_limit)
async def send_message(
    request: Request,
    message: str = Form(""),
    nonce: str = Form(""),
    proxy: ChatProxyHandler = Depends(get_chat_proxy),
):
    """
    Relay a visitor message to the webhook.

    The session travels only in the HttpOnly cookie; it is never read from
    or written to the body.
    """
    result = await proxy.handle(
        message=message,
        session_id=request.cookies.get(proxy.cookie_name),
        nonce=nonce,
        secure=request.url.scheme == "https",
    )
    return _to_response(result)


@router.get("/widget/config")
@limiter.limit("60/minute")
async def get_widget_config(
    request: Request,
    proxy: ChatProxyHandler = Depends(get_chat_proxy),
):
    """
    Public endpoint to get widget display config.
    No auth required - returns only non-sensitive display settings plus a
    fresh anti-forgery token for the chat endpoint.
    """
    if not proxy.settings.widget.enabled:
        raise HTTPException(status_code=403, detail="Widget is disabled")

    config = proxy.widget_config(str(request.url_for("send_message")))
    return config.public_dict()
