"""Several clients editing the same list concurrently."""

import asyncio

from linkviz import ListRegistry


async def client(registry: ListRegistry, list_id: str, name: str, values: range) -> None:
    """Append values, yielding between each so clients interleave."""
    for value in values:
        snap = await registry.append(list_id, value)
        print(f"  {name}: appended {value}, size now {snap.size}")
        await asyncio.sleep(0.01)


async def main() -> None:
    registry = ListRegistry()
    shared = await registry.create_list("shared", "double")

    print("=== Concurrent clients ===\n")
    await asyncio.gather(
        client(registry, shared.id, "client-a", range(0, 3)),
        client(registry, shared.id, "client-b", range(100, 103)),
    )

    snap = await registry.get_list(shared.id)
    print(f"\nFinal list: {[r.value for r in snap.nodes]}")


if __name__ == "__main__":
    asyncio.run(main())
