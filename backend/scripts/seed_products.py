#!/usr/bin/env python3
"""
Seed categories and products from a JSON file, or from a small built-in list
when no file is given. Entries whose name already exists are skipped, so the
script can be re-run safely.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file ../public/mock/catalogue.json
"""
import argparse
import json
import os
import sys
from decimal import Decimal, InvalidOperation

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.db import SessionLocal, init_db
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.services.catalogue_service import CatalogueService
from app.utils.transactions import smart_transaction

DEFAULT_PRODUCTS = [
    {"product_name": "Tea 100g", "price": "3.00", "category": "drinks", "description": "Loose leaf black tea"},
    {"product_name": "Coffee 200g", "price": "6.00", "category": "drinks", "description": "Ground arabica"},
    {"product_name": "Chips", "price": "9.99", "category": "snacks", "description": "Salted potato chips"},
    {"product_name": "Chocolate bar", "price": "1.99", "category": "snacks", "description": "Milk chocolate"},
]


def _normalize_entry(entry):
    """Return a dict with keys: product_name, price, category, description, img_url"""
    name = entry.get("product_name") or entry.get("name") or entry.get("title") or ""
    raw_price = entry.get("price", entry.get("amount", 0))
    try:
        price = Decimal(str(raw_price)).quantize(Decimal("0.01"))
    except InvalidOperation:
        price = Decimal("0.00")

    img_url = entry.get("img_url") or entry.get("image")
    if not img_url:
        imgs = entry.get("images") or entry.get("image_urls") or []
        img_url = imgs[0] if isinstance(imgs, (list, tuple)) and len(imgs) > 0 else None

    return {
        "product_name": name.strip(),
        "price": price,
        "category": (entry.get("category") or "uncategorized").strip().lower(),
        "description": entry.get("description") or "",
        "img_url": img_url,
    }


def _load(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data["items"] if isinstance(data.get("items"), list) else list(data.values())
    return data if isinstance(data, list) else []


def seed(entries):
    init_db()
    db = SessionLocal()
    created = 0
    try:
        svc = CatalogueService(db)
        categories = CategoryRepository(db)
        products = ProductRepository(db)
        for entry in map(_normalize_entry, entries):
            if not entry["product_name"]:
                continue
            with smart_transaction(db):
                category = categories.get_by_name(entry["category"])
                exists = products.get_by_name(entry["product_name"]) is not None
            if category is None:
                category = svc.create_category(entry["category"])
            if exists:
                continue
            svc.create_product(
                entry["product_name"],
                entry["price"],
                str(category.id),
                description=entry["description"],
                img_url=entry["img_url"],
            )
            created += 1
        print("Seeded products:", created)
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to product json (frontend mock) or a list of product entries")
    args = parser.parse_args()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed(_load(args.file) if args.file else DEFAULT_PRODUCTS)
