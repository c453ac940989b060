"""Categories router: the fixed default category list."""
from typing import Annotated

from fastapi import APIRouter, Query

from quarion.interfaces.api.v1.schemas.finance import CategoryResponse
from quarion.interfaces.dependencies import Facade

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    facade: Facade,
    category_type: Annotated[str | None, Query(pattern="^(income|expense)$")] = None,
):
    return [
        CategoryResponse(name=c.name, category_type=str(c.category_type))
        for c in facade.list_categories(category_type)
    ]
