"""CategoryManager component for the admin categories page."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.category import Category

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import AdminAPI


class CategoryManager:
    """Lists, saves, toggles, and deletes product categories.

    Deleting a category that still has products is refused before any call;
    the server may still refuse others, and its message is shown verbatim.
    """

    def __init__(self, admin_api: AdminAPI, notifier: Notifier) -> None:
        self._admin_api = admin_api
        self._notifier = notifier
        self.categories: list[Category] = []

    async def load(self) -> list[Category]:
        try:
            self.categories = await self._admin_api.get_categories()
        except ApiError:
            self._notifier.error("Failed to load categories")
        return self.categories

    def filter(self, term: str) -> list[Category]:
        needle = term.lower()
        return [c for c in self.categories if needle in c.name.lower()]

    async def save(
        self,
        fields: dict[str, Any],
        category: Category | None = None,
        files: Any = None,
    ) -> bool:
        """Create a category, or update ``category`` when given."""
        try:
            if category is not None:
                await self._admin_api.update_category(category.id, fields, files=files)
                self._notifier.success("Category updated successfully")
            else:
                await self._admin_api.create_category(fields, files=files)
                self._notifier.success("Category created successfully")
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to save category"))
            return False
        await self.load()
        return True

    async def delete(self, category: Category) -> bool:
        if category.product_count > 0:
            self._notifier.error(
                f"Cannot delete category with {category.product_count} product(s). "
                "Please reassign them first."
            )
            return False
        try:
            await self._admin_api.delete_category(category.id)
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to delete category"))
            return False
        self._notifier.success("Category deleted successfully")
        await self.load()
        return True

    async def toggle_active(self, category: Category) -> bool:
        activate = not category.is_active
        try:
            await self._admin_api.update_category(
                category.id,
                {"name": category.name, "isActive": str(activate).lower()},
            )
        except ApiError:
            self._notifier.error("Failed to update category status")
            return False
        self._notifier.success(f"Category {'activated' if activate else 'deactivated'}")
        await self.load()
        return True
