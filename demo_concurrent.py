import asyncio
import uuid
from sdk.shopclient import ShopClient
import httpx

async def add_one(client, cart_id, product_id, n):
    try:
        await client.add_to_cart_async(cart_id, product_id, 1)
        print(f"✅ request {n} added 1 unit")
    except httpx.HTTPStatusError as e:
        print(f"❌ request {n} failed with {e.response.status_code}: {e.response.text}")

async def main():
    c = ShopClient(base_url="http://127.0.0.1:8080")

    product = c.add_product("Sticker", "Vinyl sticker", 2, "sticker.png", f"STK-{uuid.uuid4().hex[:6]}", 100)["product"]
    cart = c.create_cart()["cart"]
    print(f"\n🛒 Cart {cart['id']}, product {product['id']}")

    # Every request increments the same cart entry
    print("\n⚡ Sending 20 concurrent additions...")
    await asyncio.gather(*(add_one(c, cart["id"], product["id"], n) for n in range(20)))

    print("\n📦 Final cart:", c.view_cart(cart["id"]))

if __name__ == "__main__":
    asyncio.run(main())
