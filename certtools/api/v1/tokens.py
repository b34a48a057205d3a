from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from certtools.api.dependencies import get_token_service
from certtools.core.config import settings
from certtools.core.security import create_certificate_payload
from certtools.schemas.certificate import CertificateCreate
from certtools.schemas.token import GenerateResponse, JWTInfo, VerifyRequest, VerifyResponse
from certtools.services.tokens import InvalidClaims, TokenService

router = APIRouter()


@router.post("/generate-jwt", response_model=GenerateResponse)
async def generate_jwt(
    claims: Any = Body(None),
    service: TokenService = Depends(get_token_service),
) -> GenerateResponse:
    try:
        generated = service.generate(claims)
    except InvalidClaims as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return GenerateResponse(jwt=generated.jwt, payload=generated.payload)


@router.post("/generate-certificate", response_model=GenerateResponse)
async def generate_certificate(
    payload: CertificateCreate,
    service: TokenService = Depends(get_token_service),
) -> GenerateResponse:
    claims = create_certificate_payload(**payload.model_dump())
    generated = service.generate(claims)
    return GenerateResponse(jwt=generated.jwt, payload=generated.payload)


@router.post("/verify-jwt", response_model=VerifyResponse)
async def verify_jwt(
    payload: VerifyRequest,
    service: TokenService = Depends(get_token_service),
) -> VerifyResponse | JSONResponse:
    if not payload.jwt:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No JWT provided")

    result = service.verify(payload.jwt)
    response = VerifyResponse(**result.model_dump(), success=result.verified)
    if not result.verified:
        # Ошибки проверки токена - это ошибки клиента
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=response.model_dump(mode="json"),
        )
    return response


@router.get("/jwt-info", response_model=JWTInfo)
async def jwt_info() -> JWTInfo:
    return JWTInfo(
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        note="JWTs are signed with HMAC-SHA256 using a secret key",
    )
