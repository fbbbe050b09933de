# sdk/shopclient.py
import httpx
import requests
from typing import Any, Dict, Optional


class ShopClient:
    def __init__(self, base_url: str = "http://localhost:8080", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def ping(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Products
    def list_products(self, limit: Optional[int] = None):
        params = {"limit": limit} if limit else {}
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_product(self, title: str, description: str, price: float, thumbnail: str, code: str, stock: int):
        r = self.session.post(f"{self.base_url}/products", json={
            "title": title, "description": description, "price": price,
            "thumbnail": thumbnail, "code": code, "stock": stock,
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: int, **fields: Any):
        r = self.session.put(f"{self.base_url}/products/{product_id}", json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Carts
    def create_cart(self):
        r = self.session.post(f"{self.base_url}/carts", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def view_cart(self, cart_id: int):
        r = self.session.get(f"{self.base_url}/carts/{cart_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_to_cart(self, cart_id: int, product_id: int, quantity: int = 1):
        r = self.session.post(
            f"{self.base_url}/carts/{cart_id}/product/{product_id}",
            json={"quantity": quantity},
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    # Async add (used by the concurrent demo)
    async def add_to_cart_async(self, cart_id: int, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(
                f"{self.base_url}/carts/{cart_id}/product/{product_id}",
                json={"quantity": quantity},
            )
            r.raise_for_status()
            return r.json()
