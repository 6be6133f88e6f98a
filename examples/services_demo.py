import asyncio
from enum import Enum

from conframe import BaseCommand, CliApplication, argument, command
from conframe.console import console


class Level(Enum):
    Low = 1
    Medium = 2
    High = 3


class Inventory:
    def __init__(self) -> None:
        self.items: dict[str, int] = {"apples": 3, "pears": 0}

    async def restock(self, item: str, amount: int) -> int:
        await asyncio.sleep(0.1)
        self.items[item] = self.items.get(item, 0) + amount
        return self.items[item]


@command("restock", "rs", description="Restocks an item")
class Restock(BaseCommand):
    item: str = argument(required=True, description="Item to restock")
    amount: int = argument(default=1, description="How many to add")
    priority: Level | None = argument(description="Urgency of the order")

    def __init__(self, inventory: Inventory):
        self.inventory = inventory

    async def evaluate(self) -> None:
        total = await self.inventory.restock(self.item, self.amount)
        level = self.priority.name if self.priority else "unset"
        console.print(f"{self.item}: {total} in stock (priority {level})")


@command("stock", description="Lists the inventory")
class Stock(BaseCommand):
    def __init__(self, inventory: Inventory):
        self.inventory = inventory

    def evaluate(self) -> None:
        for item, amount in self.inventory.items.items():
            console.print(f"{item}: {amount}")


app = CliApplication("Inventory shell. Try: restock pears --amount=5 --priority=high")
app.services.add_service(Inventory, Inventory())
app.register_commands(Restock, Stock)

if __name__ == "__main__":
    asyncio.run(app.run())
