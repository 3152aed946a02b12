from typing import Optional

from pydantic import Field

from app.schemas.common import LocalizedText, WireModel


class LandingMenuImageCreate(WireModel):
    image_url: str = Field(..., min_length=1, max_length=1024)
    alt_text_i18n: Optional[LocalizedText] = None
    order_index: int = Field(..., ge=0)
    is_active: bool = True


class LandingMenuImageUpdate(WireModel):
    image_url: Optional[str] = Field(None, min_length=1, max_length=1024)
    alt_text_i18n: Optional[LocalizedText] = None
    order_index: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class MarqueeImageCreate(LandingMenuImageCreate):
    is_pinned: bool = False


class MarqueeImageUpdate(LandingMenuImageUpdate):
    is_pinned: Optional[bool] = None


class MarqueeSlideCreate(WireModel):
    image_url: str = Field(..., min_length=1, max_length=1024)
    tag_i18n: Optional[LocalizedText] = None
    text_i18n: Optional[LocalizedText] = None
    order_index: int = Field(..., ge=0)
    is_active: bool = True


class MarqueeSlideUpdate(WireModel):
    image_url: Optional[str] = Field(None, min_length=1, max_length=1024)
    tag_i18n: Optional[LocalizedText] = None
    text_i18n: Optional[LocalizedText] = None
    order_index: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
