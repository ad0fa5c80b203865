"""Example: Put a modern interface in front of a legacy object.

This script demonstrates how to:
1. Build an adapter class that renames and forwards methods
2. Construct the wrapped object through the adapter in one step
3. Build a transparent adapter with the _OBJECT_ sentinel and autoload

Usage:
    python examples/legacy_cart_example.py
"""

from classadapter import OBJECT_SENTINEL, AdapterBuilder, build_adapter


class LegacyCart:
    """A cart with an awkward interface nobody wants to touch."""

    def __init__(self, owner: str = "guest"):
        self.owner = owner
        self.lines: list[tuple[str, float]] = []

    def push_line_item(self, sku: str, price: float) -> None:
        self.lines.append((sku, price))

    def drop_line_item(self, sku: str) -> None:
        self.lines = [line for line in self.lines if line[0] != sku]

    def compute_grand_total(self) -> float:
        return sum(price for _, price in self.lines)

    def close(self) -> None:
        print(f"  (cart of {self.owner} closed)")


Cart = build_adapter(
    __name__ + ".Cart",
    NEW=LegacyCart,
    add="push_line_item",
    remove="drop_line_item",
    total="compute_grand_total",
)

Transparent = build_adapter(__name__ + ".Transparent", ISA=OBJECT_SENTINEL, AUTOLOAD=True)


def main():
    """Run the legacy cart example."""
    print("🔄 Building a cart through the adapter...")
    cart = Cart.new("alice")
    cart.add("book", 12.5)
    cart.add("pen", 1.5)
    cart.remove("pen")
    print(f"✅ Total: {cart.total()}")
    print(f"  Wrapped object: {cart.wrapped_object()!r}")

    print("\n📋 Rendered source of the Cart adapter:")
    builder = AdapterBuilder("preview.Cart")
    builder.apply_all(
        {"NEW": LegacyCart, "add": "push_line_item", "total": "compute_grand_total"}
    )
    print(builder.render())

    print("🔄 Wrapping an existing cart transparently...")
    legacy = LegacyCart("bob")
    legacy.push_line_item("lamp", 30.0)
    clear = Transparent.new(legacy)
    print(f"✅ isinstance(clear, LegacyCart): {isinstance(clear, LegacyCart)}")
    print(f"✅ Total through autoload: {clear.compute_grand_total()}")

    print("\n🔄 Releasing the transparent adapter...")
    del clear


if __name__ == "__main__":
    main()
