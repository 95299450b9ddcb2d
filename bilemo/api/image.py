"""
Read-only image endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bilemo.api.product_models import ImageResponse
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.repository import image_repository
from bilemo.services.pagination_service import (
    PageRequest,
    get_page_request,
    pagination_service,
)

router = APIRouter()


@router.get("/images", response_model=List[ImageResponse])
async def list_images(
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    """
    One page of product images.
    """
    return pagination_service.list_page(
        db,
        image_repository,
        page_request,
        lambda image: ImageResponse.model_validate(image).model_dump(mode="json"),
    )


@router.get("/images/{image_id}", response_model=ImageResponse)
async def get_image(image_id: int, db: Session = Depends(get_db)):
    """
    A single image and the product it belongs to.
    """
    image = image_repository.find(db, image_id)
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_("Image not found")
        )
    return ImageResponse.model_validate(image)
