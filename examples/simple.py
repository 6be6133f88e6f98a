import asyncio

from conframe import BaseCommand, CliApplication, argument, command
from conframe.console import console


@command("example", description="An example command")
class ExampleCommand(BaseCommand):
    message: str = argument(required=True)
    optional: int = argument(description="some optional value for things")

    def evaluate(self) -> None:
        if self.optional == 0:
            console.print(self.message)
        else:
            console.print(f"{self.message} optional: {self.optional}")


@command("greet", "hi", description="Greets someone")
class Greet(BaseCommand):
    name: str = argument(required=True, description="Who to greet", example="Ada")
    shout: bool = argument(description="Greet loudly")

    def evaluate(self) -> None:
        greeting = f"Hello, {self.name}!"
        console.print(greeting.upper() if self.shout else greeting)


app = CliApplication(
    "Welcome to My CLI Tool!\n"
    "Type 'help' to see available commands.\n"
    "Let's get started!",
    log_mode="auto",
)
app.register_commands(ExampleCommand, Greet)

if __name__ == "__main__":
    asyncio.run(app.run())
