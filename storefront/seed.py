import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.models.product import Product

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "product_name": "Wireless Headphones",
        "description": "Experience crystal-clear audio with these comfortable wireless headphones. Perfect for music lovers and gamers alike.",
        "price": Decimal("99.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=Headphones",
        "stock_quantity": 50,
    },
    {
        "product_name": "Smartwatch Pro",
        "description": "Stay connected and track your fitness goals with the new Smartwatch Pro. Features heart rate monitoring, GPS, and long battery life.",
        "price": Decimal("199.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=Smartwatch",
        "stock_quantity": 30,
    },
    {
        "product_name": "Portable Bluetooth Speaker",
        "description": "Take your music anywhere with this compact and powerful Bluetooth speaker. Waterproof and durable for outdoor adventures.",
        "price": Decimal("49.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=Speaker",
        "stock_quantity": 100,
    },
    {
        "product_name": "Gaming Mouse",
        "description": "Precision gaming mouse with customizable RGB lighting and ergonomic design for long gaming sessions.",
        "price": Decimal("34.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=Gaming+Mouse",
        "stock_quantity": 75,
    },
    {
        "product_name": "USB-C Hub",
        "description": "Expand your laptops connectivity with this versatile USB-C hub, featuring multiple ports for all your peripherals.",
        "price": Decimal("29.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=USB-C+Hub",
        "stock_quantity": 120,
    },
    {
        "product_name": "Ergonomic Keyboard",
        "description": "Boost your productivity and comfort with this full-size ergonomic keyboard, designed for natural typing posture.",
        "price": Decimal("79.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=Keyboard",
        "stock_quantity": 60,
    },
    {
        "product_name": "Webcam 1080p",
        "description": "High-definition 1080p webcam perfect for video calls, streaming, and online meetings.",
        "price": Decimal("59.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=Webcam",
        "stock_quantity": 40,
    },
    {
        "product_name": "External SSD 1TB",
        "description": "Fast and reliable 1TB external SSD for backing up your important files and expanding storage.",
        "price": Decimal("119.99"),
        "image_url": "https://placehold.co/300x300/F0F9FF/1F2937?text=SSD",
        "stock_quantity": 25,
    },
]


def seed_demo_products(db: Session) -> int:
    """
    Insert the demo catalog if the products table is empty.

    Returns:
        Number of products inserted (0 when the catalog already had rows)
    """
    if db.query(Product).first() is not None:
        return 0

    db.add_all(Product(**data) for data in DEMO_PRODUCTS)
    db.commit()
    logger.info(f"Inserted {len(DEMO_PRODUCTS)} demo products")
    return len(DEMO_PRODUCTS)
