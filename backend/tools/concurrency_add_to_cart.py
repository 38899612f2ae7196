"""
Fire concurrent add-to-cart requests for one (user, product) pair against a
running server, then read the aggregated cart back. With the upsert in place
the cart holds a single line whose quantity is workers * qty.

    python tools/concurrency_add_to_cart.py --product <uuid> --workers 16 --qty 1
"""
import argparse
import concurrent.futures
import os
from uuid import uuid4

import requests

BASE = os.environ.get("SHOP_BASE", "http://127.0.0.1:8000/api/v1")


def add_task(i, user_id, product_id, qty):
    payload = {"user_id": user_id, "product_id": product_id, "total_qty": qty}
    try:
        r = requests.post(f"{BASE}/carts/", json=payload, timeout=10)
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run(workers, user_id, product_id, qty):
    print(f"Running add-to-cart test: workers={workers}, user={user_id}, product={product_id}, qty={qty}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(add_task, i, user_id, product_id, qty) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r[:2])
    created = sum(1 for r in results if r[1] == 201)
    merged = sum(1 for r in results if r[1] == 200)
    print(f"created={created} merged={merged} failed={len(results) - created - merged}")

    cart = requests.get(f"{BASE}/carts/{user_id}", timeout=10).json()
    lines = [d for d in cart.get("data", []) if d["product_id"] == product_id]
    total = sum(d["total_qty"] for d in lines)
    print(f"aggregated total_qty={total} expected={workers * qty}")
    return total == workers * qty


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent add-to-cart check.")
    parser.add_argument("--product", required=True)
    parser.add_argument("--user", default=None)
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args()

    ok = run(args.workers, args.user or f"load-{uuid4().hex[:8]}", args.product, args.qty)
    raise SystemExit(0 if ok else 1)
