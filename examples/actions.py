from arbor import Command


def greet(command: Command, args: list[str]) -> None:
    name = command.flags.get("name")
    greeting = "Hello" if not command.flags.get("shout") else "HELLO"
    print(f"{greeting}, {name}!")


def count(command: Command, args: list[str]) -> None:
    for number in range(1, command.flags.get("times") + 1):
        print(number)
