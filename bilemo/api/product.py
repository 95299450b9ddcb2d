"""
Product API endpoints.

Listing and reading products is public.  Creating and updating need an
admin account; deleting needs a super admin.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bilemo.api.product_models import (
    ProductCreate,
    ProductFields,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from bilemo.i18n import _
from bilemo.persistence.db import get_db
from bilemo.persistence.models import Product, User
from bilemo.persistence.repository import image_repository, product_repository
from bilemo.security.roles import Roles, require_role
from bilemo.services.merge_policy import merge_fields, merged_state
from bilemo.services.pagination_service import (
    PageRequest,
    get_page_request,
    pagination_service,
)
from bilemo.services.validator_service import ValidationFailedError, validator_service
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.api.product")

router = APIRouter()

DUPLICATE_REFERENCE = "A product with this reference already exists."


def _serialize_row(product: Product) -> dict:
    return ProductListResponse.model_validate(product).model_dump(mode="json")


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = product_repository.find(db, product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_("Product not found")
        )
    return product


def _commit(db: Session, product: Product):
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Product %s rejected by the database: %s", product.reference, exc)
        raise ValidationFailedError([_(DUPLICATE_REFERENCE)]) from exc
    db.refresh(product)


@router.get("/products", response_model=List[ProductListResponse])
async def list_products(
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    """
    One page of the catalog, in id order.
    """
    return pagination_service.list_page(
        db, product_repository, page_request, _serialize_row
    )


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    """
    Full description of one product, images included.
    """
    product = _get_product_or_404(db, product_id)
    return ProductResponse.model_validate(product)


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    product_data: ProductCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(Roles.ADMIN, "You do not have sufficient rights to create a product.")
    ),
):
    """
    Add a product to the catalog.
    """
    validator_service.validate_or_raise(
        validator_service.check_unique(
            db, Product.reference, product_data.reference, _(DUPLICATE_REFERENCE)
        )
    )

    product = Product(**product_data.model_dump(exclude_none=True))
    db.add(product)
    _commit(db, product)
    pagination_service.invalidate(product_repository.tag)

    logger.info("Product %s created by %s", product.id, current_user.email)
    response.headers["Location"] = str(
        request.url_for("get_product", product_id=product.id)
    )
    return ProductResponse.model_validate(product)


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(Roles.ADMIN, "You do not have sufficient rights to update a product.")
    ),
):
    """
    Apply the sent fields to a product.  Images are left untouched.
    """
    product = _get_product_or_404(db, product_id)

    messages = validator_service.check_validation(
        ProductFields, merged_state(product, product_data, ProductFields)
    )
    if "reference" in product_data.model_fields_set:
        messages += validator_service.check_unique(
            db,
            Product.reference,
            product_data.reference,
            _(DUPLICATE_REFERENCE),
            exclude_id=product.id,
        )
    if "release_date" in product_data.model_fields_set and product_data.release_date is None:
        messages.append(
            _("%(field)s: this value should not be blank.") % {"field": "release_date"}
        )
    validator_service.validate_or_raise(messages)

    changes = merge_fields(product, product_data)
    _commit(db, product)
    pagination_service.invalidate(product_repository.tag, image_repository.tag)

    logger.info(
        "Product %s updated by %s (%s)",
        product.id,
        current_user.email,
        ", ".join(sorted(changes)) or "no change",
    )
    response.headers["Location"] = str(
        request.url_for("get_product", product_id=product.id)
    )
    return ProductResponse.model_validate(product)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_role(
            Roles.SUPER_ADMIN, "You do not have sufficient rights to delete a product."
        )
    ),
):
    """
    Remove a product and its images.
    """
    product = _get_product_or_404(db, product_id)
    db.delete(product)
    db.commit()
    pagination_service.invalidate(product_repository.tag, image_repository.tag)

    logger.info("Product %s deleted by %s", product_id, current_user.email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
