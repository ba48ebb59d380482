"""Tests for CategoryManager."""

import pytest

from storefront.domain.components.category_manager import CategoryManager
from storefront.domain.models.category import Category

CATEGORIES = [
    {"_id": "c1", "name": "Wooden Nameplates", "isActive": True, "productCount": 4},
    {"_id": "c2", "name": "Door Signs", "isActive": False, "productCount": 0},
]


class TestCategoryManager:
    @pytest.fixture(autouse=True)
    def setup(self, api, backend, notifier) -> None:
        self.backend = backend
        self.notifier = notifier
        self.manager = CategoryManager(api.admin, notifier)
        backend.on("GET", "/categories/all", {"categories": CATEGORIES})

    @pytest.mark.asyncio
    async def test_load_and_filter(self) -> None:
        await self.manager.load()

        assert [c.name for c in self.manager.filter("door")] == ["Door Signs"]
        assert len(self.manager.filter("")) == 2

    @pytest.mark.asyncio
    async def test_delete_with_products_is_refused_locally(self) -> None:
        category = Category.model_validate(CATEGORIES[0])

        assert await self.manager.delete(category) is False

        assert self.notifier.errors == [
            "Cannot delete category with 4 product(s). Please reassign them first."
        ]
        assert self.backend.requests == []

    @pytest.mark.asyncio
    async def test_delete_server_rejection_is_shown_verbatim(self) -> None:
        self.backend.on(
            "DELETE", "/categories/c2", {"message": "Category is referenced by a banner"}, status=400
        )

        assert await self.manager.delete(Category.model_validate(CATEGORIES[1])) is False
        assert self.notifier.errors == ["Category is referenced by a banner"]

    @pytest.mark.asyncio
    async def test_delete_reloads(self) -> None:
        self.backend.on("DELETE", "/categories/c2", {"message": "Deleted"})

        assert await self.manager.delete(Category.model_validate(CATEGORIES[1])) is True
        assert self.notifier.successes == ["Category deleted successfully"]
        assert len(self.backend.calls("GET", "/categories/all")) == 1

    @pytest.mark.asyncio
    async def test_toggle_active(self) -> None:
        self.backend.on("PUT", "/categories/c2", {"message": "ok"})

        assert await self.manager.toggle_active(Category.model_validate(CATEGORIES[1])) is True

        request = self.backend.calls("PUT", "/categories/c2")[0]
        assert b"isActive" in request.content
        assert self.notifier.successes == ["Category activated"]

    @pytest.mark.asyncio
    async def test_save_creates_category(self) -> None:
        self.backend.on("POST", "/categories", {"_id": "c3"})

        assert await self.manager.save({"name": "Keychains", "description": "Small gifts"})
        assert self.notifier.successes == ["Category created successfully"]
