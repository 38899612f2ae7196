import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
USER = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Cart lines ===")
if USER:
    cur.execute(
        "SELECT id, user_id, product_id, total_qty, created_at, updated_at FROM carts WHERE user_id=? ORDER BY created_at",
        (USER,),
    )
else:
    cur.execute(
        "SELECT id, user_id, product_id, total_qty, created_at, updated_at FROM carts ORDER BY updated_at DESC LIMIT 20"
    )
for r in cur.fetchall():
    print(
        {
            "id": r[0],
            "user_id": r[1],
            "product_id": r[2],
            "total_qty": r[3],
            "created_at": r[4],
            "updated_at": r[5],
        }
    )

print("\n=== Duplicate (user, product) pairs ===")
cur.execute(
    "SELECT user_id, product_id, COUNT(*) FROM carts GROUP BY user_id, product_id HAVING COUNT(*) > 1"
)
dups = cur.fetchall()
for r in dups:
    print(r)
if not dups:
    print("none")

conn.close()
