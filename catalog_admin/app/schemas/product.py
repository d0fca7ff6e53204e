from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: Optional[str] = None
    category_id: int = Field(..., alias="categoryId")
    is_active: bool = Field(True, alias="isActive")
