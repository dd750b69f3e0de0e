from pydantic import BaseModel, Field


class MenuNode(BaseModel):
    """Node of the navigation tree supplied by the menu configuration"""

    path: str = Field(..., min_length=1)
    label: str
    children: list["MenuNode"] | None = None


class PageResponse(BaseModel):
    """Flattened catalog page"""

    id: str
    label: str
    depth: int
    parent_id: str | None = None

    model_config = {"from_attributes": True}


class CatalogResponse(BaseModel):
    """Full catalog in navigation order"""

    pages: list[PageResponse]
    total: int
