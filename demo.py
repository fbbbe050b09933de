#!/usr/bin/env python
import uuid
from sdk.shopclient import ShopClient

def main():
    c = ShopClient(base_url="http://127.0.0.1:8080")

    print(c.ping())
    suffix = uuid.uuid4().hex[:6]

    # -----------------------------
    # Add products
    # -----------------------------
    print("\nAdding products...")
    lamp = c.add_product("Lamp", "Desk lamp", 25, "lamp.png", f"LAMP-{suffix}", 10)["product"]
    mug = c.add_product("Mug", "Coffee mug", 8, "mug.png", f"MUG-{suffix}", 40)["product"]
    print(lamp)
    print(mug)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products (limit 1)...")
    print(c.list_products(limit=1))
    print("\nListing all products...")
    print(c.list_products())

    # -----------------------------
    # Update product
    # -----------------------------
    print("\nUpdating lamp price...")
    print(c.update_product(lamp["id"], price=30))

    # -----------------------------
    # Carts
    # -----------------------------
    print("\nCreating cart...")
    cart = c.create_cart()["cart"]
    print(cart)

    print("\nAdding products to cart...")
    print(c.add_to_cart(cart["id"], lamp["id"], 2))
    print(c.add_to_cart(cart["id"], lamp["id"], 3))
    print(c.add_to_cart(cart["id"], mug["id"]))

    print("\nViewing cart...")
    print(c.view_cart(cart["id"]))

    # -----------------------------
    # Delete product
    # -----------------------------
    print("\nDeleting mug...")
    print(c.delete_product(mug["id"]))

if __name__ == "__main__":
    main()
