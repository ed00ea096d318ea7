"""Basic usage example for linkviz."""

import asyncio

from linkviz import ListRegistry, ValueNotFoundError


async def main() -> None:
    """Demonstrate list operations on each variant."""
    async with ListRegistry() as registry:
        print("=== Singly-linked list ===\n")
        single = await registry.create_list("numbers", "single")
        for value in (1, 2, 3):
            await registry.append(single.id, value)
        snap, removed = await registry.delete_at(single.id, 1)
        print(f"Removed {removed}, remaining: {[r.value for r in snap.nodes]}\n")

        print("=== Circular list ===\n")
        ring = await registry.create_list("ring", "circular")
        await registry.append(ring.id, 5)
        await registry.append(ring.id, 6)
        for record in await registry.project(ring.id):
            print(f"  {record.id}: {record.value} -> {record.next_id}")
        print()

        print("=== Doubly-linked list ===\n")
        double = await registry.create_list("pairs", "double")
        await registry.insert_at(double.id, 0, 10)
        await registry.insert_at(double.id, 1, 20)
        snap, index = await registry.delete_by_value(double.id, 10)
        print(f"Deleted 10 from index {index}: {snap.to_dict()}\n")

        try:
            await registry.find_by_value(double.id, 42)
        except ValueNotFoundError as exc:
            print(f"Lookup failed: {exc}")


if __name__ == "__main__":
    asyncio.run(main())
