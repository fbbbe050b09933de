# jsonshop/managers.py
import asyncio
import copy
import logging
from typing import Any, Dict, List, Optional

from .database import FileStore
from .errors import NotFound, ValidationFailure

logger = logging.getLogger(__name__)

REQUIRED_PRODUCT_FIELDS = ("title", "description", "price", "thumbnail", "code", "stock")


class _Manager:
    """Owns one collection and the file behind it.

    Mutations run under a single asyncio.Lock and await the file rewrite
    before returning, so two requests can never interleave a change.
    """

    kind = "item"

    def __init__(self, store: FileStore):
        self.store = store
        self._items: List[Dict[str, Any]] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        data = await self.store.load()
        if not isinstance(data, list):
            logger.warning("%s does not hold a JSON array, starting empty", self.store.path)
            data = []
        self._items = data
        self._refresh_next_id()
        logger.info("Loaded %d %ss from %s", len(self._items), self.kind, self.store.path)

    def _refresh_next_id(self) -> None:
        ids = [i["id"] for i in self._items if isinstance(i, dict) and isinstance(i.get("id"), int)]
        self._next_id = max(ids, default=0) + 1

    def _take_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def _index_of(self, item_id: int) -> int:
        for idx, item in enumerate(self._items):
            if item.get("id") == item_id:
                return idx
        raise NotFound(f"{self.kind} {item_id} not found")

    async def _persist(self) -> None:
        await self.store.save(self._items)

    def __len__(self) -> int:
        return len(self._items)


# ---------------------------
# Products
# ---------------------------
class ProductManager(_Manager):
    kind = "product"

    async def add_product(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        missing = [name for name in REQUIRED_PRODUCT_FIELDS if not fields.get(name)]
        if missing:
            logger.warning("Rejected product, missing fields: %s", ", ".join(missing))
            raise ValidationFailure(f"missing required fields: {', '.join(missing)}")

        async with self._lock:
            if any(p.get("code") == fields["code"] for p in self._items):
                logger.warning("Rejected product, duplicate code %r", fields["code"])
                raise ValidationFailure(f"a product with code {fields['code']!r} already exists")

            product = {"id": self._take_id()}
            product.update({name: fields[name] for name in REQUIRED_PRODUCT_FIELDS})
            self._items.append(product)
            await self._persist()

        logger.info("Product added: %s", product)
        return copy.deepcopy(product)

    def get_products(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        items = self._items
        if isinstance(limit, int) and not isinstance(limit, bool) and limit > 0:
            items = items[:limit]
        return copy.deepcopy(items)

    def get_product_by_id(self, product_id: int) -> Dict[str, Any]:
        return copy.deepcopy(self._items[self._index_of(product_id)])

    async def update_product(self, product_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Updating product %s with %s", product_id, fields)
        changes = {k: v for k, v in fields.items() if k != "id"}
        empty = [name for name in REQUIRED_PRODUCT_FIELDS if name in changes and not changes[name]]
        if empty:
            logger.warning("Rejected update of product %s, empty fields: %s", product_id, ", ".join(empty))
            raise ValidationFailure(f"fields cannot be empty: {', '.join(empty)}")

        async with self._lock:
            idx = self._index_of(product_id)
            code = changes.get("code")
            if code is not None and any(
                p.get("code") == code and p.get("id") != product_id for p in self._items
            ):
                logger.warning("Rejected update of product %s, duplicate code %r", product_id, code)
                raise ValidationFailure(f"a product with code {code!r} already exists")

            updated = {**self._items[idx], **changes, "id": product_id}
            self._items[idx] = updated
            await self._persist()

        logger.info("Product updated: %s", updated)
        return copy.deepcopy(updated)

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        async with self._lock:
            removed = self._items.pop(self._index_of(product_id))
            await self._persist()

        logger.info("Product deleted: %s", removed)
        return removed


# ---------------------------
# Carts
# ---------------------------
class CartManager(_Manager):
    kind = "cart"

    async def add_cart(self) -> Dict[str, Any]:
        async with self._lock:
            cart = {"id": self._take_id(), "products": []}
            self._items.append(cart)
            await self._persist()

        logger.info("Cart created: %s", cart)
        return copy.deepcopy(cart)

    def get_cart_by_id(self, cart_id: int) -> Dict[str, Any]:
        return copy.deepcopy(self._items[self._index_of(cart_id)])

    def get_products_in_cart(self, cart_id: int) -> List[Dict[str, Any]]:
        return self.get_cart_by_id(cart_id)["products"]

    async def add_product_to_cart(self, cart_id: int, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            logger.warning("Rejected quantity %r for cart %s", quantity, cart_id)
            raise ValidationFailure("quantity must be a positive integer")

        async with self._lock:
            cart = self._items[self._index_of(cart_id)]
            entries = cart.setdefault("products", [])
            for entry in entries:
                if entry.get("id") == product_id:
                    entry["quantity"] = entry.get("quantity", 0) + quantity
                    break
            else:
                entries.append({"id": product_id, "quantity": quantity})
            await self._persist()
            result = copy.deepcopy(cart)

        logger.info("Added product %s x%s to cart %s", product_id, quantity, cart_id)
        return result
