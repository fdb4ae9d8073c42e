"""
Demo data loader.

Wipes the stores, products and inventory tables and loads a fixed
catalogue with randomised stock levels.  Stores are spread across size
tiers so the dashboard has a flagship carrying everything, a few large
and medium stores, a long tail of small ones and one empty store.

Run it with ``store-inventory-seed`` or set ``SEED_ON_STARTUP=true``.
"""

import argparse
import logging
import random
from typing import Optional

from sqlalchemy import delete
from sqlmodel import Session

from .core.config import settings
from .core.logging_config import setup_logging
from .database import build_engine, create_db_and_tables, session_scope
from .models import Inventory, Product, Store

logger = logging.getLogger(__name__)

STORES = [
    ("New York Times Square", "nyc-times-square"),
    ("San Francisco Union Square", "sf-union-square"),
    ("Toronto Eaton Centre", "toronto-eaton"),
    ("Mexico City Reforma", "cdmx-reforma"),
    ("São Paulo Paulista", "sp-paulista"),
    ("Buenos Aires Palermo", "ba-palermo"),
    ("London Oxford Street", "london-oxford"),
    ("Paris Champs-Élysées", "paris-champs"),
    ("Berlin Alexanderplatz", "berlin-alex"),
    ("Amsterdam Dam Square", "amsterdam-dam"),
    ("Tokyo Shibuya", "tokyo-shibuya"),
    ("Singapore Orchard Road", "sg-orchard"),
    ("Seoul Gangnam", "seoul-gangnam"),
    ("Mumbai Bandra", "mumbai-bandra"),
    ("Dubai Mall", "dubai-mall"),
    ("Cape Town V&A Waterfront", "capetown-va"),
    ("Lagos Victoria Island", "lagos-vi"),
    ("Nairobi Westlands", "nairobi-westlands"),
    ("Sydney Pitt Street", "sydney-pitt"),
    ("Melbourne CBD", "melbourne-cbd"),
    ("Auckland Queen Street", "auckland-queen"),
]

PRODUCTS = [
    ("ELC-001", 'MacBook Pro 16" M3 Max', "Electronics", 3499.99),
    ("ELC-002", 'MacBook Air 15" M3', "Electronics", 1299.99),
    ("ELC-003", 'iPad Pro 13" M4', "Electronics", 1299.99),
    ("ELC-004", "iPhone 15 Pro Max 256GB", "Electronics", 1199.99),
    ("ELC-006", "AirPods Pro 2nd Gen", "Electronics", 249.99),
    ("ELC-010", "Sony WH-1000XM5", "Electronics", 349.99),
    ("ELC-014", "Logitech MX Master 3S", "Electronics", 99.99),
    ("ELC-016", "Keychron Q1 Pro", "Electronics", 199.99),
    ("ELC-020", "Anker USB-C Hub 10-in-1", "Electronics", 79.99),
    ("FRN-001", "Herman Miller Aeron Chair", "Furniture", 1395.99),
    ("FRN-002", "Steelcase Leap V2", "Furniture", 1199.99),
    ("FRN-004", "Uplift V2 Standing Desk", "Furniture", 799.99),
    ("FRN-006", "Fully Monitor Arm Dual", "Furniture", 329.99),
    ("FRN-009", "BenQ ScreenBar Plus", "Furniture", 129.99),
    ("OFS-001", "Moleskine Classic XL", "Office Supplies", 24.99),
    ("OFS-003", "Pilot Vanishing Point", "Office Supplies", 152.99),
    ("OFS-005", "Zebra Sarasa Clip 10-Pack", "Office Supplies", 14.99),
    ("OFS-009", "Brother P-Touch Label Maker", "Office Supplies", 59.99),
    ("APL-001", "Breville Barista Express", "Appliances", 699.99),
    ("APL-002", "Fellow Ode Grinder", "Appliances", 299.99),
    ("APL-004", "Fellow Stagg EKG Kettle", "Appliances", 169.99),
    ("APL-010", "Ember Mug 14oz", "Appliances", 149.99),
    ("ACC-001", "Peak Design Everyday V2 20L", "Accessories", 259.99),
    ("ACC-002", "Bellroy Tech Kit", "Accessories", 69.99),
    ("ACC-007", "Anker 3-in-1 MagSafe Cube", "Accessories", 149.99),
    ("ACC-009", "Yeti Rambler 26oz", "Accessories", 35.99),
    ("STG-001", "Samsung T7 Shield 2TB SSD", "Storage", 189.99),
    ("STG-003", "WD My Passport 4TB", "Storage", 109.99),
    ("AV-001", "Rode NT-USB Mini", "Audio/Video", 99.99),
    ("AV-003", "Shure MV7", "Audio/Video", 249.99),
    ("AV-007", "DJI Pocket 3", "Audio/Video", 519.99),
    ("GMG-001", "PlayStation 5 Slim", "Gaming", 449.99),
    ("GMG-003", "Nintendo Switch OLED", "Gaming", 349.99),
    ("GMG-004", "Steam Deck OLED 512GB", "Gaming", 549.99),
]

# (last store index in the tier, min products, max products); None means every product
TIERS = [
    (0, None, None),  # flagship
    (3, 24, 30),  # large
    (8, 12, 22),  # medium
    (15, 4, 10),  # small
    (19, 1, 3),  # tiny
]


def products_for_store(index: int, product_total: int, rng: random.Random) -> int:
    for last_index, low, high in TIERS:
        if index <= last_index:
            if low is None:
                return product_total
            return rng.randint(low, min(high, product_total))
    return 0


def stock_level(rng: random.Random) -> int:
    # Roughly one row in five starts below its threshold
    if rng.random() < 0.2:
        return rng.randint(1, 7)
    if rng.random() < 0.3:
        return rng.randint(100, 500)
    return rng.randint(25, 150)


def seed_database(session: Session, rng: Optional[random.Random] = None) -> int:
    """Replace all data with the demo catalogue and return the number of inventory rows."""
    rng = rng or random.Random()

    for model in (Inventory, Product, Store):
        session.execute(delete(model))

    stores = [Store(name=name, slug=slug) for name, slug in STORES]
    products = [
        Product(sku=sku, name=name, category=category, price=price) for sku, name, category, price in PRODUCTS
    ]
    session.add_all(stores + products)
    session.flush()

    rows = 0
    for index, store in enumerate(stores):
        count = products_for_store(index, len(products), rng)
        for product in rng.sample(products, count):
            session.add(
                Inventory(
                    store_id=store.id,
                    product_id=product.id,
                    quantity=stock_level(rng),
                    low_stock_threshold=rng.randint(8, 20),
                )
            )
            rows += 1

    session.commit()
    logger.info("Database seeded: %d stores, %d products, %d inventory rows", len(stores), len(products), rows)
    return rows


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Reset the database and load demo inventory data.")
    parser.add_argument("--database-url", default=settings.DATABASE_URL, help="SQLAlchemy database URL")
    parser.add_argument("--random-seed", type=int, default=None, help="Seed for reproducible stock levels")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL)
    engine = build_engine(args.database_url)
    create_db_and_tables(engine)
    with session_scope(engine) as session:
        seed_database(session, random.Random(args.random_seed))


if __name__ == "__main__":
    main()
