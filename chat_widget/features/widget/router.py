"""Widget embed endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from chat_widget.features.chat.service import ChatProxyHandler, get_chat_proxy

from .embed import render_widget_markup

router = APIRouter(prefix="/widget", tags=["widget"])


@router.get("/embed", response_class=HTMLResponse)
async def widget_embed(
    request: Request,
    proxy: ChatProxyHandler = Depends(get_chat_proxy),
):
    """
    Widget markup for the page footer.

    Nothing is rendered while the widget is disabled or no webhook is set,
    so visitors never see a widget that cannot answer.
    """
    settings = proxy.settings
    if not settings.widget.enabled or not settings.webhook_url.strip():
        return Response(status_code=204)

    config = proxy.widget_config(str(request.url_for("send_message")))
    return HTMLResponse(render_widget_markup(config))
