"""
Seed script -- populates the database with the café menu and a sample order.

Run with:
    python src/seed.py

Menu items are idempotent (checked by name before inserting); the sample
order is added on every run.
"""

from datetime import datetime, timezone

from sqlalchemy import insert, select

from db import create_tables, get_engine
from models import MenuItem, Order

MENU = [
    {"name": "Espresso", "category": "coffee", "price_cents": 300,
     "image_url": "img/espresso.jpg", "description": "A short, dense double shot."},
    {"name": "Latte", "category": "coffee", "price_cents": 450,
     "image_url": "img/latte.jpg", "description": "Espresso with steamed milk."},
    {"name": "Cappuccino", "category": "coffee", "price_cents": 425,
     "image_url": "img/cappuccino.jpg", "description": "Equal parts espresso, milk and foam."},
    {"name": "Earl Grey", "category": "tea", "price_cents": 350,
     "image_url": "img/earl-grey.jpg", "description": "Bergamot black tea."},
    {"name": "Croissant", "category": "pastry", "price_cents": 300,
     "image_url": "img/croissant.jpg", "description": "All-butter, baked every morning."},
    {"name": "Pain au Chocolat", "category": "pastry", "price_cents": 375,
     "image_url": "img/pain-au-chocolat.jpg", "description": "Laminated dough, dark chocolate."},
    {"name": "Mona Lisa Macarons", "category": "dessert", "price_cents": 800,
     "image_url": "img/macarons.jpg", "description": "Box of six, seasonal flavours."},
]


def seed() -> None:
    create_tables()
    menu = MenuItem.__table__
    orders = Order.__table__

    with get_engine().begin() as conn:
        # ------------------------------------------------------------------ #
        # Menu                                                                 #
        # ------------------------------------------------------------------ #
        for item in MENU:
            exists = conn.execute(
                select(menu.c.id).where(menu.c.name == item["name"])
            ).first()
            if exists:
                continue
            conn.execute(insert(menu).values(is_available=True, **item))
            print(f"  [+] Menu item: {item['name']}")

        # ------------------------------------------------------------------ #
        # Sample order                                                         #
        # ------------------------------------------------------------------ #
        items = [
            {"name": "Latte", "unitPrice": 4.5, "quantity": 2, "imageUrl": "img/latte.jpg"},
            {"name": "Croissant", "unitPrice": 3.0, "quantity": 1, "imageUrl": "img/croissant.jpg"},
        ]
        now = datetime.now(timezone.utc)
        conn.execute(
            insert(orders).values(
                customer_name="Alice Martin",
                customer_email="alice@example.com",
                status="pending",
                items=items,
                total_cents=1200,
                created_at=now,
                updated_at=now,
            )
        )
        print("  [+] Order for Alice: $12.00")

    print("\nSeed completed successfully.")


if __name__ == "__main__":
    print("Seeding database...")
    seed()
