from fastapi import APIRouter, Depends

from hotel_console.core.catalog import get_catalog
from hotel_console.dependencies import get_current_operator
from hotel_console.schemas.catalog_schemas import CatalogResponse, PageResponse

router = APIRouter()


@router.get("", response_model=CatalogResponse)
async def get_page_catalog(operator: str = Depends(get_current_operator)):
    """
    Flattened navigation catalog.

    Pages are listed in menu order, each module followed by its sub-pages.
    Only sub-pages (depth > 0) can be assigned privileges.
    """
    pages = [PageResponse.model_validate(page) for page in get_catalog()]
    return CatalogResponse(pages=pages, total=len(pages))
