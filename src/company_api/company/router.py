"""企業APIのルーター定義."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from company_api.company.schema import (
    CompanyCreateRequest,
    CompanyPatchRequest,
    CompanyResponse,
    CompanyUpdateRequest,
    ErrorResponse,
)
from company_api.company.service import CompanyService, get_company_service

router = APIRouter(prefix="/company", tags=["company"])

Service = Annotated[CompanyService, Depends(get_company_service)]

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse}}


@router.get("", response_model=list[CompanyResponse])
async def get_all_companies(service: Service) -> list[CompanyResponse]:
    """登録済みの企業一覧を企業名順で返す."""
    companies = await service.list_companies()
    return [CompanyResponse.model_validate(c) for c in companies]


@router.get(
    "/isin/{isin}",
    response_model=CompanyResponse,
    responses=NOT_FOUND,
)
async def get_company_by_isin(isin: str, service: Service) -> CompanyResponse:
    """ISINで企業を返す."""
    company = await service.get_company_by_isin(isin)
    return CompanyResponse.model_validate(company)


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    responses=NOT_FOUND,
)
async def get_company_by_id(
    company_id: uuid.UUID,
    service: Service,
) -> CompanyResponse:
    """企業IDで企業を返す."""
    company = await service.get_company(company_id)
    return CompanyResponse.model_validate(company)


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **CONFLICT},
)
async def create_company(
    body: CompanyCreateRequest,
    request: Request,
    response: Response,
    service: Service,
) -> CompanyResponse:
    """企業を作成し、Locationヘッダに取得用URLを設定する."""
    company = await service.create_company(body)
    response.headers["Location"] = str(
        request.url_for("get_company_by_id", company_id=str(company.id))
    )
    return CompanyResponse.model_validate(company)


@router.put(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
)
async def update_company(
    company_id: uuid.UUID,
    body: CompanyUpdateRequest,
    service: Service,
) -> CompanyResponse:
    """企業の全項目を更新する."""
    company = await service.replace_company(company_id, body)
    return CompanyResponse.model_validate(company)


@router.patch(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
)
async def patch_company(
    company_id: uuid.UUID,
    body: CompanyPatchRequest,
    service: Service,
) -> CompanyResponse:
    """送信されたフィールドのみを更新する."""
    company = await service.patch_company(company_id, body.provided_fields())
    return CompanyResponse.model_validate(company)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_company(company_id: uuid.UUID, service: Service) -> Response:
    """企業を削除する."""
    await service.delete_company(company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
