# core/deps.py
"""
FastAPI dependencies shared by the routers.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status

from core.errors import EntityNotFoundError
from core.filters import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, MAX_PAGE, PageParams


async def get_page_params(
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_PAGE, description="1-based page number"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page"),
) -> PageParams:
    return PageParams(page=page, limit=limit)


def not_found(exc: EntityNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
    )


# Type aliases for cleaner endpoint signatures
Pagination = Annotated[PageParams, Depends(get_page_params)]
