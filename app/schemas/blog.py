from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import LocalizedText, RequiredText, UtcDatetime, WireModel

BlogStatus = Literal["draft", "published", "scheduled", "archived"]

# update keys where an explicit null means "clear it"
NULLABLE_UPDATE_KEYS = {
    "published_at",
    "scheduled_at",
    "excerpt_i18n",
    "cover_image",
    "seo_title_i18n",
    "seo_description_i18n",
    "canonical_url",
    "og_image_url",
}


class SlugPair(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    vi: str = Field(..., min_length=1, max_length=200)
    en: str = Field(..., min_length=1, max_length=200)


class ContentPair(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vi: dict[str, Any]
    en: dict[str, Any]


class ContentPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vi: Optional[dict[str, Any]] = None
    en: Optional[dict[str, Any]] = None


class CoverImage(WireModel):
    url: str = Field(..., min_length=1, max_length=1024)
    public_id: Optional[str] = None
    alt_i18n: Optional[LocalizedText] = None


class GalleryItem(CoverImage):
    caption_i18n: Optional[LocalizedText] = None


class Robots(BaseModel):
    index: bool = True
    follow: bool = True


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    out: List[str] = []
    for t in tags:
        t = t.strip()
        if t and t not in out:
            out.append(t)
    return out


class BlogCreate(WireModel):
    slug: Optional[str] = Field(None, max_length=200)
    slug_i18n: SlugPair
    title_i18n: RequiredText
    excerpt_i18n: Optional[LocalizedText] = None
    content_i18n: ContentPair
    cover_image: Optional[CoverImage] = None
    gallery: List[GalleryItem] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    status: Optional[BlogStatus] = None
    published_at: Optional[UtcDatetime] = None
    scheduled_at: Optional[UtcDatetime] = None
    is_featured: bool = False
    sort_order: int = 0
    seo_title_i18n: Optional[LocalizedText] = None
    seo_description_i18n: Optional[LocalizedText] = None
    canonical_url: Optional[str] = Field(None, max_length=1024)
    og_image_url: Optional[str] = Field(None, max_length=1024)
    robots: Optional[Robots] = None
    author_name: Optional[str] = Field(None, max_length=160)

    @field_validator("tags")
    @classmethod
    def _tags(cls, v):
        return _clean_tags(v)


class BlogUpdate(WireModel):
    slug: Optional[str] = Field(None, max_length=200)
    slug_i18n: Optional[SlugPair] = None
    title_i18n: Optional[RequiredText] = None
    excerpt_i18n: Optional[LocalizedText] = None
    content_i18n: Optional[ContentPatch] = None
    cover_image: Optional[CoverImage] = None
    gallery: Optional[List[GalleryItem]] = None
    tags: Optional[List[str]] = None
    status: Optional[BlogStatus] = None
    published_at: Optional[UtcDatetime] = None
    scheduled_at: Optional[UtcDatetime] = None
    is_featured: Optional[bool] = None
    sort_order: Optional[int] = None
    seo_title_i18n: Optional[LocalizedText] = None
    seo_description_i18n: Optional[LocalizedText] = None
    canonical_url: Optional[str] = Field(None, max_length=1024)
    og_image_url: Optional[str] = Field(None, max_length=1024)
    robots: Optional[Robots] = None
    author_name: Optional[str] = Field(None, max_length=160)

    @field_validator("tags")
    @classmethod
    def _tags(cls, v):
        return _clean_tags(v)

    def to_data(self, exclude_none: bool = False) -> dict:
        data = self.model_dump(include=set(self.model_fields_set))
        return {k: v for k, v in data.items() if v is not None or k in NULLABLE_UPDATE_KEYS}


class BlogSchedule(WireModel):
    scheduled_at: Optional[UtcDatetime] = None
