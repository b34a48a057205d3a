from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from certtools.api.dependencies import get_qr_renderer
from certtools.schemas.qrcode import QRCodeRequest
from certtools.services.qrcode import QRCodeError, QRCodeRenderer, is_valid_token_format

router = APIRouter()


@router.post("/qr")
async def render_qr(
    payload: QRCodeRequest,
    renderer: QRCodeRenderer = Depends(get_qr_renderer),
) -> Response:
    if not is_valid_token_format(payload.jwt):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JWT format")

    overrides = payload.model_dump(exclude={"jwt", "format"}, exclude_none=True)
    options = renderer.options.model_copy(update=overrides)
    try:
        if payload.format == "svg":
            return Response(content=renderer.render_svg(payload.jwt, options), media_type="image/svg+xml")
        return Response(content=renderer.render_png(payload.jwt, options), media_type="image/png")
    except QRCodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
