"""ProductManager component for the admin products page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storefront.domain.components.list_views import PagedListView
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.category import Category
from storefront.domain.models.page import Page
from storefront.domain.models.product import Product, ProductDraft

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import AdminAPI, CategoriesAPI


class ProductManager(PagedListView[Product]):
    """Admin products page: paged listing, search, and the create/edit form.

    Required fields and the category selection are checked before any call.
    The listing re-fetches after every successful save or delete.
    """

    fetch_failure_message = "Failed to fetch products"

    def __init__(
        self,
        admin_api: AdminAPI,
        categories_api: CategoriesAPI,
        notifier: Notifier,
        observability_manager: ObservabilityManager,
    ) -> None:
        super().__init__(admin_api, None, notifier, observability_manager)
        self._categories_api = categories_api
        self.categories: list[Category] = []

    async def _fetch(self) -> Page[Product]:
        return await self._admin_api.get_products(page=self.page, search=self.search)

    async def load_categories(self) -> list[Category]:
        """Categories offered by the form's picker.

        A failure is only logged; the form stays usable with the last list.
        """
        try:
            data = await self._categories_api.get_all()
        except ApiError as e:
            await self._observability.log(
                level="WARNING",
                message=f"Failed to fetch categories: {e}",
            )
            return self.categories
        if isinstance(data, dict):
            data = data.get("categories") or []
        self.categories = [Category.model_validate(c) for c in data or []]
        return self.categories

    async def save(
        self,
        draft: ProductDraft,
        product: Product | None = None,
    ) -> bool:
        """Create a product, or update ``product`` when given.

        Args:
            draft: Form contents.
            product: The product being edited, if any.
        """
        if not draft.name or not draft.description or draft.price is None:
            self._notifier.error("Please fill in required fields")
            return False
        if not draft.categories:
            self._notifier.error("Please select at least one category")
            return False

        try:
            if product is not None:
                await self._admin_api.update_product(product.id, draft.to_form_data())
                self._notifier.success("Product updated successfully")
            else:
                await self._admin_api.create_product(draft.to_form_data())
                self._notifier.success("Product created successfully")
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to save product"))
            return False
        await self.refresh()
        return True

    async def delete(self, product: Product) -> bool:
        try:
            await self._admin_api.delete_product(product.id)
        except ApiError:
            self._notifier.error("Failed to delete product")
            return False
        self._notifier.success("Product deleted successfully")
        await self.refresh()
        return True
