"""
Pydantic models for the product and image API endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from bilemo.api.field_types import NotBlank, ShortText, SpecText


class ProductFields(BaseModel):
    """Product attributes a client may write."""

    reference: NotBlank
    series: NotBlank
    name: NotBlank
    description: Optional[str] = None
    maker: ShortText
    price: int = Field(..., ge=0)
    color: ShortText
    platform: ShortText
    network: Optional[SpecText] = None
    connector: Optional[SpecText] = None
    battery: Optional[SpecText] = None
    ram: Optional[SpecText] = None
    rom: Optional[SpecText] = None
    brand_cpu: Optional[SpecText] = None
    speed_cpu: Optional[SpecText] = None
    cores_cpu: Optional[int] = Field(None, ge=0)
    main_cam: Optional[SpecText] = None
    sub_cam: Optional[SpecText] = None
    display_type: Optional[SpecText] = None
    display_size: Optional[SpecText] = None
    double_sim: Optional[bool] = None
    card_reader: Optional[bool] = None
    foldable: Optional[bool] = None
    esim: Optional[bool] = None
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    depth: Optional[int] = Field(None, ge=0)
    weight: Optional[int] = Field(None, ge=0)


class ProductCreate(ProductFields):
    """Body of POST /products.  The release date defaults to now."""

    release_date: Optional[datetime] = None


class ProductUpdate(BaseModel):
    """
    Body of PUT /products/{id}.  Only the fields sent are applied; images
    cannot be changed here.
    """

    reference: Optional[NotBlank] = None
    release_date: Optional[datetime] = None
    series: Optional[NotBlank] = None
    name: Optional[NotBlank] = None
    description: Optional[str] = None
    maker: Optional[ShortText] = None
    price: Optional[int] = Field(None, ge=0)
    color: Optional[ShortText] = None
    platform: Optional[ShortText] = None
    network: Optional[SpecText] = None
    connector: Optional[SpecText] = None
    battery: Optional[SpecText] = None
    ram: Optional[SpecText] = None
    rom: Optional[SpecText] = None
    brand_cpu: Optional[SpecText] = None
    speed_cpu: Optional[SpecText] = None
    cores_cpu: Optional[int] = Field(None, ge=0)
    main_cam: Optional[SpecText] = None
    sub_cam: Optional[SpecText] = None
    display_type: Optional[SpecText] = None
    display_size: Optional[SpecText] = None
    double_sim: Optional[bool] = None
    card_reader: Optional[bool] = None
    foldable: Optional[bool] = None
    esim: Optional[bool] = None
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    depth: Optional[int] = Field(None, ge=0)
    weight: Optional[int] = Field(None, ge=0)


class ImageSummary(BaseModel):
    """Image as embedded in a product."""

    id: int
    name: str

    class Config:
        from_attributes = True


class ProductSummary(BaseModel):
    """Product as embedded in an image."""

    id: int
    reference: str
    name: str

    class Config:
        from_attributes = True


class ProductListResponse(BaseModel):
    """Product in list pages."""

    id: int
    reference: str
    name: str
    maker: str
    price: int
    color: str
    platform: str

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    """Full product, with its images."""

    id: int
    reference: str
    release_date: datetime
    series: str
    name: str
    description: Optional[str] = None
    maker: str
    price: int
    color: str
    platform: str
    network: Optional[str] = None
    connector: Optional[str] = None
    battery: Optional[str] = None
    ram: Optional[str] = None
    rom: Optional[str] = None
    brand_cpu: Optional[str] = None
    speed_cpu: Optional[str] = None
    cores_cpu: Optional[int] = None
    main_cam: Optional[str] = None
    sub_cam: Optional[str] = None
    display_type: Optional[str] = None
    display_size: Optional[str] = None
    double_sim: Optional[bool] = None
    card_reader: Optional[bool] = None
    foldable: Optional[bool] = None
    esim: Optional[bool] = None
    width: Optional[int] = None
    height: Optional[int] = None
    depth: Optional[int] = None
    weight: Optional[int] = None
    images: List[ImageSummary] = []

    class Config:
        from_attributes = True


class ImageResponse(BaseModel):
    """Image in list pages and detail views."""

    id: int
    name: str
    product: Optional[ProductSummary] = None

    class Config:
        from_attributes = True
