"""Provider and context catalogue routes."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..exceptions import ProviderNotFoundError
from ..providers.pool import Pool
from .dependencies import get_pool
from .schemas import ContextResponse, FormFieldPayload, ProviderFormResponse

router = APIRouter(prefix="/api", tags=["providers"])


@router.get("/providers")
def list_providers(pool: Pool = Depends(get_pool)) -> dict[str, str]:
    """Return registered provider names for selection widgets."""
    return pool.get_provider_list()


@router.get("/providers/{name}/form", response_model=ProviderFormResponse)
def provider_form(
    name: str,
    mode: Literal["create", "edit"] = Query(default="edit"),
    pool: Pool = Depends(get_pool),
) -> ProviderFormResponse:
    try:
        provider = pool.get_provider(name)
    except ProviderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "provider_not_found"},
        ) from None

    fields = provider.build_create_form() if mode == "create" else provider.build_edit_form()
    return ProviderFormResponse(
        provider=name,
        mode=mode,
        fields=[
            FormFieldPayload(name=field.name, type=field.type, required=field.required)
            for field in fields
        ],
    )


@router.get("/contexts/{name}", response_model=ContextResponse)
def get_context(name: str, pool: Pool = Depends(get_pool)) -> ContextResponse:
    context = pool.get_context(name)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "context_not_found"},
        )
    return ContextResponse(name=name, providers=context.providers, formats=context.formats)
