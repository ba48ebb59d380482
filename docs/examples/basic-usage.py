"""
Basic StorefrontClient Usage Example

This example walks through a shopper and an admin session:
- Signing in
- Filling the cart and reading its totals
- Checking out with the demo payment flow
- Moving an order through the two-step status confirmation

Prerequisites:
    pip install -e .

    The storefront backend must be reachable at STOREFRONT_API_URL
    (default http://localhost:5000/api).

Run with: python docs/examples/basic-usage.py
"""

import asyncio
import os

from storefront import StorefrontClient
from storefront.domain.models.api_error import ApiError


async def shop(client: StorefrontClient) -> None:
    print("Signing in as shopper...")
    await client.login(
        os.getenv("SHOPPER_EMAIL", "shopper@example.com"),
        os.getenv("SHOPPER_PASSWORD", "password"),
    )
    print(f"✓ Signed in, {client.cart.item_count} item(s) in cart")

    product_id = os.getenv("PRODUCT_ID")
    if product_id:
        await client.cart.add(product_id, quantity=1)

    totals = client.cart.totals()
    print(f"  Cart subtotal {totals.subtotal} {totals.currency}, total {totals.total}")
    hint = client.cart.free_shipping_hint()
    if hint:
        print(f"  Add {hint} more for free shipping")

    if client.cart.is_empty:
        print("Cart is empty, skipping checkout")
        return

    client.checkout.start()
    if not client.checkout.proceed_to_payment():
        print("✗ Shipping address incomplete")
        return
    client.checkout.select_payment_method("demo")
    if await client.checkout.pay():
        print(f"✓ Order placed: {client.checkout.order_path}")


async def administer(client: StorefrontClient) -> None:
    print("Signing in as admin...")
    await client.login(
        os.getenv("ADMIN_EMAIL", "admin@example.com"),
        os.getenv("ADMIN_PASSWORD", "password"),
    )

    await client.orders.refresh()
    print(f"✓ {client.orders.total or len(client.orders.rows)} order(s), page {client.orders.page}/{client.orders.total_pages}")
    if not client.orders.rows:
        return

    order = client.orders.rows[0]
    request = client.orders.request_status_change(order.id, "shipped")
    if request is None:
        print("  Order is already shipped")
        return

    notice = client.order_gate.notice
    print(f"  {notice.headline}: {notice.summary}")
    # critical changes ask twice
    while client.order_gate.is_open:
        print(f"  [{client.order_gate.confirm_label}]")
        await client.order_gate.confirm()
    print(f"  Status is now {client.orders.selector_value(order.id).value}")


async def main() -> None:
    async with StorefrontClient() as client:
        try:
            await shop(client)
            await client.logout()
            await administer(client)
        except ApiError as e:
            print(f"✗ {e.category.value}: {e}")


if __name__ == "__main__":
    asyncio.run(main())
