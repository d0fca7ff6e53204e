"""
In-memory stand-in for the remote catalog REST service.

Served through httpx.MockTransport so repositories run against their real
wire format. Failures can be injected per product or per operation.
"""

import copy
import json
import math
import re
from typing import Any, Dict, List, Optional, Set
from urllib.parse import parse_qs

import httpx

_MULTIPART_FIELD = re.compile(
    rb'name="(?P<name>[^"]+)"(?:; filename="[^"]*")?\r\n(?:[^\r\n]+\r\n)*\r\n(?P<value>.*?)\r\n--',
    re.DOTALL,
)


def _json(status_code: int, body: Dict[str, Any]) -> httpx.Response:
    return httpx.Response(status_code, json=body)


class FakeCatalogBackend:
    def __init__(self):
        self.categories: Dict[int, Dict[str, Any]] = {}
        self.products: Dict[int, Dict[str, Any]] = {}
        self.next_category_id = 99
        self.failing_product_ids: Set[int] = set()
        self.fail_category_create = False
        self.fail_category_delete = False
        self.gateway_error_on_delete = False
        self.requests: List[httpx.Request] = []

    # ----------------------------------------------------------------- seeding

    def add_category(
        self,
        category_id: int,
        name: str,
        parent_id: Optional[int] = None,
        image: Optional[str] = None,
    ) -> None:
        self.categories[category_id] = {
            "id": category_id,
            "name": name,
            "parentId": parent_id,
            "image": image,
            "description": None,
        }

    def add_product(
        self,
        product_id: int,
        category_id: int,
        is_active: bool = True,
        name: Optional[str] = None,
    ) -> None:
        self.products[product_id] = {
            "id": product_id,
            "name": name or f"Product {product_id}",
            "categoryId": category_id,
            "isActive": is_active,
        }

    def snapshot(self):
        return copy.deepcopy(self.categories), copy.deepcopy(self.products)

    def requests_for(self, method: str, path_prefix: str) -> List[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == method
            and request.url.path.startswith("/api" + path_prefix)
        ]

    # ----------------------------------------------------------------- helpers

    def _children(self, category_id: int) -> List[Dict[str, Any]]:
        return sorted(
            (c for c in self.categories.values() if c["parentId"] == category_id),
            key=lambda c: c["name"],
        )

    def _subtree_ids(self, category_id: int) -> List[int]:
        ids = [category_id]
        for child in self._children(category_id):
            ids.extend(self._subtree_ids(child["id"]))
        return ids

    def _node(self, category_id: int) -> Dict[str, Any]:
        node = dict(self.categories[category_id])
        node["productCount"] = sum(
            1
            for p in self.products.values()
            if p["categoryId"] == category_id and p["isActive"]
        )
        node["subCategories"] = [self._node(c["id"]) for c in self._children(category_id)]
        return node

    @staticmethod
    def _form(request: httpx.Request) -> Dict[str, str]:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("multipart/form-data"):
            return {
                match.group("name").decode(): match.group("value").decode(
                    "utf-8", errors="replace"
                )
                for match in _MULTIPART_FIELD.finditer(request.content)
            }
        if content_type.startswith("application/json"):
            return json.loads(request.content or b"{}")
        return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}

    @staticmethod
    def _page(items: List[Any], request: httpx.Request):
        page = int(request.url.params.get("page", 1))
        limit = int(request.url.params.get("limit", 50))
        total_pages = max(1, math.ceil(len(items) / limit))
        return items[(page - 1) * limit : page * limit], total_pages, page

    # ----------------------------------------------------------------- routing

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        method = request.method

        if path == "/categories" and method == "GET":
            return self._list_categories(request)
        if path == "/categories" and method == "POST":
            return self._create_category(self._form(request), None)

        match = re.fullmatch(r"/categories/subcategory/(\d+)", path)
        if match and method == "POST":
            return self._create_category(self._form(request), int(match.group(1)))

        match = re.fullmatch(r"/categories/(\d+)", path)
        if match:
            category_id = int(match.group(1))
            if method == "GET":
                return self._get_category(category_id)
            if method == "PUT":
                return self._update_category(category_id, self._form(request))
            if method == "DELETE":
                return self._delete_category(category_id)

        if path == "/products" and method == "GET":
            return self._list_products(request)

        match = re.fullmatch(r"/products/(\d+)", path)
        if match and method == "PUT":
            return self._update_product(int(match.group(1)), self._form(request))

        return _json(404, {"message": f"Route {method} {path} not found"})

    def _list_categories(self, request: httpx.Request) -> httpx.Response:
        top_level = sorted(
            (c for c in self.categories.values() if c["parentId"] is None),
            key=lambda c: c["name"],
        )
        nodes = [self._node(c["id"]) for c in top_level]
        page_items, total_pages, page = self._page(nodes, request)
        return _json(
            200,
            {
                "categories": page_items,
                "pagination": {
                    "totalItems": len(nodes),
                    "totalPages": total_pages,
                    "currentPage": page,
                },
            },
        )

    def _get_category(self, category_id: int) -> httpx.Response:
        if category_id not in self.categories:
            return _json(404, {"message": "Category not found"})
        return _json(200, {"category": self._node(category_id)})

    def _create_category(
        self, form: Dict[str, Any], parent_id: Optional[int]
    ) -> httpx.Response:
        if self.fail_category_create:
            return _json(500, {"error": "Could not create category"})
        if parent_id is not None and parent_id not in self.categories:
            return _json(404, {"message": "Parent category not found"})

        self.next_category_id += 1
        category_id = self.next_category_id
        self.add_category(category_id, form["name"], parent_id)
        self.categories[category_id]["description"] = form.get("description")
        return _json(201, {"category": self._node(category_id)})

    def _update_category(
        self, category_id: int, form: Dict[str, Any]
    ) -> httpx.Response:
        if category_id not in self.categories:
            return _json(404, {"message": "Category not found"})
        if "parentId" in form:
            self.categories[category_id]["parentId"] = form["parentId"]
        return _json(200, {"category": self._node(category_id)})

    def _delete_category(self, category_id: int) -> httpx.Response:
        if category_id not in self.categories:
            return _json(404, {"message": "Category not found"})
        if self.gateway_error_on_delete:
            return httpx.Response(
                502,
                headers={"content-type": "application/json"},
                content=b"Bad Gateway",
            )
        if self.fail_category_delete:
            return _json(500, {"message": "Database unavailable"})

        subtree_ids = self._subtree_ids(category_id)
        active = [
            p
            for p in self.products.values()
            if p["categoryId"] in subtree_ids and p["isActive"]
        ]
        if active:
            return _json(
                400,
                {
                    "message": "Category has active products",
                    "canForceDelete": True,
                    "activeProductsCount": len(active),
                    "affectedCategoryIds": subtree_ids,
                },
            )

        for node_id in subtree_ids:
            del self.categories[node_id]
        return _json(
            200, {"message": "Category deleted successfully", "data": {"id": category_id}}
        )

    def _list_products(self, request: httpx.Request) -> httpx.Response:
        raw_ids = request.url.params.get("categoryId", "")
        category_ids = {int(value) for value in raw_ids.split(",") if value}
        products = [
            p for p in self.products.values() if p["categoryId"] in category_ids
        ]
        page_items, total_pages, page = self._page(products, request)
        return _json(
            200,
            {
                "products": page_items,
                "count": len(products),
                "totalPages": total_pages,
                "currentPage": page,
            },
        )

    def _update_product(self, product_id: int, form: Dict[str, Any]) -> httpx.Response:
        if product_id in self.failing_product_ids:
            return _json(503, {"message": "Network error"})
        if product_id not in self.products:
            return _json(404, {"message": "Product not found"})

        category_id = int(form["categoryId"])
        if category_id not in self.categories:
            return _json(400, {"message": "Invalid category"})

        self.products[product_id]["categoryId"] = category_id
        return _json(
            200,
            {"message": "Product updated successfully", "product": self.products[product_id]},
        )
