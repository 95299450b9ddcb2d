"""
Account models - customers, their contacts, employees and the login
accounts (users) that carry roles.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bilemo.persistence.db import Base


class Customer(Base):
    """
    A billing account.  Deleting a customer removes its login account and
    every customer user attached to it.
    """

    __tablename__ = "customer"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    company = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    postal_code = Column(String(10), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(50), nullable=False)
    country = Column(String(50), nullable=False)
    phone = Column(String(50), nullable=False)
    tva_number = Column(String(50), nullable=True)
    siret = Column(String(50), nullable=True)
    created_at = Column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    customer_users = relationship(
        "CustomerUser",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CustomerUser.id",
    )
    user = relationship(
        "User",
        back_populates="customer",
        uselist=False,
        cascade="all, delete-orphan",
    )


class CustomerUser(Base):
    """
    An individual contact that belongs to exactly one customer.
    """

    __tablename__ = "customer_user"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    last_name = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    email = Column(String(50), nullable=False)
    postal_code = Column(String(10), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(50), nullable=False)
    country = Column(String(50), nullable=False)
    phone = Column(String(50), nullable=False)
    created_at = Column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    customer_id = Column(
        Integer,
        ForeignKey("customer.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    customer = relationship("Customer", back_populates="customer_users")


class Employee(Base):
    """
    Internal staff account.
    """

    __tablename__ = "employee"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    last_name = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    created_at = Column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    user = relationship(
        "User",
        back_populates="employee",
        uselist=False,
        cascade="all, delete-orphan",
    )


class User(Base):
    """
    Credential and role holder.  Linked to at most one of Customer or
    Employee; the link decides which scoping rules apply to the caller.
    """

    __tablename__ = "user"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(180), nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    roles = Column(JSON, nullable=False, default=list)
    customer_id = Column(
        Integer,
        ForeignKey("customer.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
    )
    employee_id = Column(
        Integer,
        ForeignKey("employee.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
    )

    customer = relationship("Customer", back_populates="user")
    employee = relationship("Employee", back_populates="user")

    def get_roles(self):
        """Stored roles plus ROLE_USER, which every account has."""
        roles = list(self.roles or [])
        if "ROLE_USER" not in roles:
            roles.append("ROLE_USER")
        return roles
