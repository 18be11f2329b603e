import asyncio

from arbor import Command, FlagType
from arbor.utils import setup_logging

setup_logging()


def build(command: Command, args: list[str]) -> None:
    output = command.flags.get("output")
    targets = args or ["all"]
    if command.flags.get("verbose"):
        print(f"Building {', '.join(targets)} into {output}")
    print("Build finished.")


async def deploy(command: Command, args: list[str]) -> None:
    environment = command.flags.get("env")
    print(f"Deploying to {environment}...")
    await asyncio.sleep(0.5)
    print("Deployed.")


root = Command(
    use="demo",
    long="🚀 Arbor demo: a small build tool with nested commands.",
)
root.global_flags.add("verbose", "v", type=FlagType.BOOL, usage="verbose output")

build_command = Command(
    use="build",
    short="Build targets",
    example="demo build -o dist -- app docs",
    run=build,
)
build_command.local_flags.add("output", "o", default="build", usage="output directory")

release = Command(use="release", short="Release management")
deploy_command = Command(use="deploy", short="Deploy a release", run=deploy)
deploy_command.local_flags.add(
    "env", "e", default="staging", usage="target environment"
)
release.add_command(deploy_command)

root.add_command(build_command, release)

if __name__ == "__main__":
    root.execute()
