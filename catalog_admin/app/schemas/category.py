from typing import Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
MIN_CATEGORY_NAME_LENGTH = 2


class CategoryNode(BaseModel):
    """Category as returned by the remote catalog service, with nested children"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    name: str = Field(..., min_length=1)
    parent_id: Optional[int] = Field(None, alias="parentId")
    description: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    product_count: int = Field(0, alias="productCount")
    children: List["CategoryNode"] = Field(default_factory=list, alias="subCategories")

    @field_validator("children", mode="before")
    @classmethod
    def default_children(cls, v):
        return v or []

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None

    def iter_descendants(self) -> Iterator["CategoryNode"]:
        """Yield every descendant in pre-order, at any depth"""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def iter_tree(self) -> Iterator["CategoryNode"]:
        yield self
        yield from self.iter_descendants()


class CategoryImage(BaseModel):
    filename: str
    content: bytes
    content_type: str

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, v):
        if v.lower() not in ALLOWED_IMAGE_TYPES:
            raise ValueError("Image must be JPEG, PNG, or WebP format")
        return v.lower()

    @field_validator("content")
    @classmethod
    def validate_size(cls, v):
        if len(v) > MAX_IMAGE_SIZE:
            raise ValueError("Image size must be less than 5MB")
        return v


class CategoryCreate(BaseModel):
    name: str
    parent_id: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None
    image: Optional[CategoryImage] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or len(v.strip()) < MIN_CATEGORY_NAME_LENGTH:
            raise ValueError("Category name must be at least 2 characters long")
        return v.strip()

    @model_validator(mode="after")
    def validate_image_placement(self):
        # Only top-level categories carry images
        if self.parent_id is not None and self.image is not None:
            raise ValueError(
                "Subcategories cannot have images. Only main categories can have images."
            )
        return self


class CategoryParentUpdate(BaseModel):
    parent_id: Optional[int] = Field(None, gt=0)


class CategoryOption(BaseModel):
    """Flattened category offered as a relocation target"""

    id: int
    name: str
    full_name: str
    level: int
    parent_id: Optional[int] = None
    is_subcategory: bool
    product_count: int = 0
    has_subcategories: bool = False
