from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import LocalizedText, RequiredText, WireModel


class ProductCategoryCreate(WireModel):
    key: str = Field(..., min_length=1, max_length=120)
    name_i18n: RequiredText
    description_i18n: Optional[LocalizedText] = None
    sort_order: int = Field(..., ge=0)

    @field_validator("key")
    @classmethod
    def _lower_key(cls, v: str) -> str:
        return v.lower()


class ProductCategoryUpdate(WireModel):
    key: Optional[str] = Field(None, min_length=1, max_length=120)
    name_i18n: Optional[RequiredText] = None
    description_i18n: Optional[LocalizedText] = None
    sort_order: Optional[int] = Field(None, ge=0)

    @field_validator("key")
    @classmethod
    def _lower_key(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class ProductVariant(WireModel):
    variant_id: Optional[str] = Field(None, max_length=80)
    label_i18n: Optional[LocalizedText] = None
    price: float = Field(..., ge=0)
    currency: str = Field("VND", min_length=1, max_length=10)
    note_i18n: Optional[LocalizedText] = None
    is_default: bool = False


class ProductCreate(WireModel):
    category_id: Optional[int] = None
    slug: Optional[str] = Field(None, max_length=160)
    name_i18n: RequiredText
    description_i18n: Optional[LocalizedText] = None
    image_url: Optional[str] = Field(None, max_length=1024)
    image_alt_i18n: Optional[LocalizedText] = None
    sort_order: int = Field(..., ge=0)
    is_available: bool = True
    variants: List[ProductVariant] = Field(..., min_length=1)
    is_favourite: bool = False
    is_must_try: bool = False
    is_vegetarian: bool = False
    spiciness_level: Optional[int] = Field(None, ge=0, le=3)
    tags: List[str] = Field(default_factory=list)


class ProductUpdate(WireModel):
    category_id: Optional[int] = None
    slug: Optional[str] = Field(None, max_length=160)
    name_i18n: Optional[RequiredText] = None
    description_i18n: Optional[LocalizedText] = None
    image_url: Optional[str] = Field(None, max_length=1024)
    image_alt_i18n: Optional[LocalizedText] = None
    sort_order: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    variants: Optional[List[ProductVariant]] = Field(None, min_length=1)
    is_favourite: Optional[bool] = None
    is_must_try: Optional[bool] = None
    is_vegetarian: Optional[bool] = None
    spiciness_level: Optional[int] = Field(None, ge=0, le=3)
    tags: Optional[List[str]] = None
