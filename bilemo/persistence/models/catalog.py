"""
Catalog models - the products BileMo sells and their pictures.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from bilemo.persistence.db import Base


class Product(Base):
    """
    This class holds the object mapping for the product table.
    """

    __tablename__ = "product"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    reference = Column(String(255), nullable=False, unique=True, index=True)
    release_date = Column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    series = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    maker = Column(String(50), nullable=False)
    price = Column(Integer, nullable=False)
    color = Column(String(50), nullable=False)
    platform = Column(String(50), nullable=False)

    # Hardware specifications
    network = Column(String(50), nullable=True)
    connector = Column(String(50), nullable=True)
    battery = Column(String(50), nullable=True)
    ram = Column(String(50), nullable=True)
    rom = Column(String(50), nullable=True)
    brand_cpu = Column(String(50), nullable=True)
    speed_cpu = Column(String(50), nullable=True)
    cores_cpu = Column(Integer, nullable=True)
    main_cam = Column(String(50), nullable=True)
    sub_cam = Column(String(50), nullable=True)
    display_type = Column(String(50), nullable=True)
    display_size = Column(String(50), nullable=True)

    # Feature flags
    double_sim = Column(Boolean, nullable=True)
    card_reader = Column(Boolean, nullable=True)
    foldable = Column(Boolean, nullable=True)
    esim = Column(Boolean, nullable=True)

    # Physical dimensions (mm / g)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    depth = Column(Integer, nullable=True)
    weight = Column(Integer, nullable=True)

    images = relationship(
        "Image",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="Image.id",
    )


class Image(Base):
    """
    This class holds the object mapping for the image table.  Images are
    only created by the fixtures; the API exposes them read-only.
    """

    __tablename__ = "image"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    product_id = Column(
        Integer, ForeignKey("product.id", ondelete="CASCADE"), nullable=True, index=True
    )

    product = relationship("Product", back_populates="images")
