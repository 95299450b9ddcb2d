"""
Demonstration data for a fresh BileMo database.

load_fixtures() fills an empty database with a catalog of 40 phones (three
images each), four customers with 20 customer users apiece, an admin
employee and a super admin.  The generator is seeded so every load
produces the same rows.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Dict

from sqlalchemy.orm import Session

from bilemo.persistence.models import Customer, CustomerUser, Employee, Image, Product, User
from bilemo.utils.password_hash import hash_password
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.persistence.fixtures")

PRODUCTS_PER_MAKER = 10
IMAGES_PER_PRODUCT = 3
CUSTOMER_COUNT = 4
CUSTOMER_USERS_PER_CUSTOMER = 20

# maker -> (series prefix, name prefix, image prefix, platform, cpu)
MAKERS = {
    "Apple": ("A", "iPhone ", "imgiPhone", "IOS", "Apple"),
    "Samsung": ("S", "Samsung S", "imgSamsungS", "Android", "Snapdragon865"),
    "Huawei": ("H", "Huawei P", "imgHuaweiP", "Android", "Kirin990"),
    "Motorola": ("M", "Moto G", "imgMotoG", "Android", "MSM8937"),
}

COLORS = ["Black", "White", "Silver", "Gold", "Blue", "Red", "Green", "Purple"]
MEMORY_SIZES = ["8Go", "16Go", "32Go", "128Go", "256Go"]
STORAGE_SIZES = ["8Go", "16Go", "32Go"]
DISPLAY_TYPES = ["OLED", "ASV", "IPS", "POLED"]

LAST_NAMES = [
    "Martin", "Bernard", "Thomas", "Petit", "Robert", "Richard", "Durand",
    "Dubois", "Moreau", "Laurent", "Simon", "Michel", "Lefebvre", "Leroy",
]
FIRST_NAMES = [
    "Camille", "Louise", "Hugo", "Jules", "Alice", "Lucas", "Chloe", "Adam",
    "Emma", "Louis", "Manon", "Arthur", "Sarah", "Nathan",
]
CITIES = [
    ("75008", "Paris"), ("69002", "Lyon"), ("13001", "Marseille"),
    ("31000", "Toulouse"), ("33000", "Bordeaux"), ("59000", "Lille"),
    ("44000", "Nantes"), ("67000", "Strasbourg"),
]
STREETS = ["rue de la Paix", "avenue Victor Hugo", "boulevard Voltaire", "rue du Port"]
COMPANY_SUFFIXES = ["Telecom", "Mobile", "Distribution", "Connect"]


def _phone(rng: random.Random) -> str:
    return "0" + "".join(str(rng.randint(0, 9)) for _ in range(9))


def _past(rng: random.Random, days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=rng.randint(0, days))


def _address(rng: random.Random) -> Dict[str, str]:
    postal_code, city = rng.choice(CITIES)
    return {
        "postal_code": postal_code,
        "address": f"{rng.randint(1, 120)} {rng.choice(STREETS)}",
        "city": city,
        "country": "France",
    }


def _products(rng: random.Random):
    references = rng.sample(range(1000, 10000000), PRODUCTS_PER_MAKER * len(MAKERS))
    for maker_index, (maker, spec) in enumerate(MAKERS.items()):
        series_prefix, name_prefix, image_prefix, platform, cpu = spec
        for i in range(PRODUCTS_PER_MAKER):
            product = Product(
                reference=str(references[maker_index * PRODUCTS_PER_MAKER + i]),
                release_date=_past(rng, 3650),
                series=f"{series_prefix}{rng.randint(1000, 6000)}",
                name=f"{name_prefix}{i}",
                description=f"{name_prefix}{i} by {maker}, {platform} smartphone.",
                maker=maker,
                price=rng.randint(400, 950),
                color=rng.choice(COLORS),
                platform=platform,
                network=f"{rng.randint(3, 5)}G",
                connector="USB",
                battery=f"{rng.randint(1000, 4500)}mAh",
                ram=rng.choice(MEMORY_SIZES),
                rom=rng.choice(STORAGE_SIZES),
                brand_cpu=cpu,
                speed_cpu=f"{rng.randint(1, 3)}Ghz",
                cores_cpu=rng.randint(1, 4),
                main_cam=f"{rng.randint(3, 20)}MP",
                sub_cam=f"{rng.randint(1, 3)}MP",
                display_type=rng.choice(DISPLAY_TYPES),
                display_size=f"{rng.uniform(3, 6):.1f}",
                double_sim=rng.random() < 0.5,
                card_reader=rng.random() < 0.5,
                foldable=rng.random() < 0.5,
                esim=rng.random() < 0.5,
                width=rng.randint(55, 90),
                height=rng.randint(100, 160),
                depth=rng.randint(7, 19),
                weight=rng.randint(100, 220),
            )
            product.images = [
                Image(name=f"{image_prefix}{i}_{j}.jpg")
                for j in range(IMAGES_PER_PRODUCT)
            ]
            yield product


def _customer(rng: random.Random, number: int) -> Customer:
    last_name = rng.choice(LAST_NAMES)
    customer = Customer(
        company=f"{last_name} {rng.choice(COMPANY_SUFFIXES)}",
        last_name=last_name,
        first_name=rng.choice(FIRST_NAMES),
        phone=_phone(rng),
        tva_number=f"FR{rng.randint(10, 99)}{rng.randint(100000000, 999999999)}",
        siret=str(rng.randint(10**13, 10**14 - 1)),
        created_at=_past(rng, 365),
        **_address(rng),
    )
    for j in range(CUSTOMER_USERS_PER_CUSTOMER):
        first_name = rng.choice(FIRST_NAMES)
        user_last_name = rng.choice(LAST_NAMES)
        customer.customer_users.append(
            CustomerUser(
                last_name=user_last_name,
                first_name=first_name,
                email=f"{first_name}.{user_last_name}{number}{j}@example.com".lower(),
                phone=_phone(rng),
                created_at=_past(rng, 365),
                **_address(rng),
            )
        )
    customer.user = User(
        email=f"customer{number}@gmail.com",
        hashed_password=hash_password(f"password{number}"),
        roles=["ROLE_CLIENT"],
    )
    return customer


def _employee(rng: random.Random, email: str, password: str, role: str) -> Employee:
    employee = Employee(
        last_name=rng.choice(LAST_NAMES),
        first_name=rng.choice(FIRST_NAMES),
        phone=_phone(rng),
        created_at=_past(rng, 365),
    )
    employee.user = User(email=email, hashed_password=hash_password(password), roles=[role])
    return employee


def load_fixtures(session: Session, seed: int = 2022) -> Dict[str, int]:
    """
    Insert the demonstration rows and commit.  Returns the number of rows
    created per entity.
    """
    rng = random.Random(seed)

    products = list(_products(rng))
    session.add_all(products)

    customers = [_customer(rng, number) for number in range(1, CUSTOMER_COUNT + 1)]
    session.add_all(customers)

    session.add(_employee(rng, "employee@bilemo.com", "password", "ROLE_ADMIN"))
    session.add(_employee(rng, "bilemo@bilemo.com", "bilemo", "ROLE_SUPER_ADMIN"))
    session.commit()

    counts = {
        "products": len(products),
        "images": len(products) * IMAGES_PER_PRODUCT,
        "customers": len(customers),
        "customer_users": len(customers) * CUSTOMER_USERS_PER_CUSTOMER,
        "employees": 2,
    }
    logger.info("Fixtures loaded: %s", counts)
    return counts
