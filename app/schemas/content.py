"""
站点内容实体模型

Record 模型对应数据网关返回的行；Form 模型对应新增/编辑表单提交的数据。
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

RowId = Union[int, str]

SOCIAL_PLATFORMS = ("facebook", "twitter", "linkedin", "instagram", "youtube", "github")


class RecordBase(BaseModel):
    """所有行的公共字段"""
    id: RowId
    created_at: Optional[datetime] = None


# ---------------- Services ----------------

class ServiceRecord(RecordBase):
    title: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None
    features: Optional[List[str]] = None


class ServiceForm(BaseModel):
    title: str
    description: str = ""
    icon: str = ""
    image_url: str = ""
    features: List[str] = Field(default_factory=list)


# ---------------- Home ----------------

class HomeContentRecord(RecordBase):
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_description: Optional[str] = None
    cta_title: Optional[str] = None
    cta_subtitle: Optional[str] = None
    updated_at: Optional[datetime] = None


class HomeContentForm(BaseModel):
    """首页文案，五个自由文本字段"""
    hero_title: str = ""
    hero_subtitle: str = ""
    hero_description: str = ""
    cta_title: str = ""
    cta_subtitle: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class HeroImageRecord(RecordBase):
    image_url: Optional[str] = None
    display_order: int = 0


class HeroImageForm(BaseModel):
    image_url: str
    display_order: int = 0


class HomeStatRecord(RecordBase):
    number: Optional[str] = None
    label: Optional[str] = None
    icon: Optional[str] = None
    display_order: int = 0


class HomeStatForm(BaseModel):
    number: str
    label: str
    icon: str = ""
    display_order: int = 0


class HomeServicePreviewRecord(RecordBase):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0


class HomeServicePreviewForm(BaseModel):
    title: str
    description: str = ""
    image_url: str = ""
    display_order: int = 0


# ---------------- Portfolio ----------------

class PortfolioCategoryRecord(RecordBase):
    name: Optional[str] = None


class PortfolioCategoryForm(BaseModel):
    name: str


class PortfolioProjectRecord(RecordBase):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    project_images: Optional[List[str]] = None
    url: Optional[str] = None
    github_url: Optional[str] = None
    technologies: Optional[List[str]] = None
    aspect_ratio: Optional[str] = None
    # 读取时关联查询得到的分类
    portfolio_categories: Optional[PortfolioCategoryRecord] = None


class PortfolioProjectForm(BaseModel):
    """category_id 在表单中是字符串，提交时转换为整数"""
    title: str
    description: str = ""
    image_url: str = ""
    category_id: str = ""
    project_images: List[str] = Field(default_factory=list)
    url: str = ""
    github_url: str = ""
    technologies: List[str] = Field(default_factory=list)
    aspect_ratio: str = "landscape"

    @field_validator("category_id", mode="before")
    @classmethod
    def category_to_str(cls, v):
        return "" if v is None else str(v)


# ---------------- Team ----------------

class TeamMemberRecord(RecordBase):
    name: Optional[str] = None
    designation: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    specialties: Optional[str] = None
    social_url_a: Optional[str] = None
    social_url_b: Optional[str] = None
    social_url_c: Optional[str] = None
    display_order: int = 0


class TeamMemberForm(BaseModel):
    name: str
    designation: str = ""
    image_url: str = ""
    bio: str = ""
    specialties: str = ""
    social_url_a: str = ""
    social_url_b: str = ""
    social_url_c: str = ""
    display_order: int = 0


# ---------------- Reviews ----------------

class ReviewRecord(RecordBase):
    name: Optional[str] = None
    designation: Optional[str] = None
    company: Optional[str] = None
    company_url: Optional[str] = None
    project: Optional[str] = None
    rating: int = 5
    review: Optional[str] = None
    image_url: Optional[str] = None
    approved: bool = False


class ReviewForm(BaseModel):
    name: str
    designation: str = ""
    company: str = ""
    company_url: str = ""
    project: str = ""
    rating: int = Field(default=5, ge=1, le=5)
    review: str = ""
    image_url: str = ""
    approved: bool = False


class ReviewStatRecord(RecordBase):
    """注意：这里的排序字段名为 order，而不是 display_order"""
    number: Optional[str] = None
    label: Optional[str] = None
    order: int = 0


class ReviewStatForm(BaseModel):
    number: str
    label: str
    order: int = 0


# ---------------- Packages ----------------

class PackageRecord(RecordBase):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    features: Optional[List[str]] = None
    is_popular: bool = False


class PackageForm(BaseModel):
    title: str
    description: str = ""
    price: str = ""
    features: List[str] = Field(default_factory=list)
    is_popular: bool = False


# ---------------- Orders ----------------

class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderRecord(RecordBase):
    """订单来自公开站点的下单流程，这里只读取、修改状态和删除"""
    order_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    package_name: Optional[str] = None
    package_price: Optional[str] = None
    status: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# ---------------- Messages ----------------

class MessageRecord(RecordBase):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    read: bool = False
    received_at: Optional[datetime] = None


class ReadToggle(BaseModel):
    read: bool


class ReplyRequest(BaseModel):
    reply_body: str


# ---------------- Contact ----------------

class SocialLinks(BaseModel):
    """社交链接，平台固定为 SOCIAL_PLATFORMS"""
    model_config = ConfigDict(extra="forbid")

    facebook: str = ""
    twitter: str = ""
    linkedin: str = ""
    instagram: str = ""
    youtube: str = ""
    github: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class ContactInfoRecord(RecordBase):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    business_hours: Optional[str] = None
    social_links: Optional[Dict[str, Optional[str]]] = None
    updated_at: Optional[datetime] = None


class ContactInfoForm(BaseModel):
    email: str = ""
    phone: str = ""
    address: str = ""
    business_hours: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks)

    @field_validator("email", "phone", "address", "business_hours", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("social_links", mode="before")
    @classmethod
    def known_platforms_only(cls, v):
        # 行中可能存有未知平台，预填表单时只保留固定平台
        if isinstance(v, dict):
            return {k: v.get(k) for k in SOCIAL_PLATFORMS}
        return SocialLinks() if v is None else v
