import asyncio
import platform
from typing import Annotated

from pydantic import Field

from minicc import AgentSettings, create_orchestrator
from minicc.core import MiniCCError, setup_logging


def system_info(
    detail: Annotated[bool, Field(description="Include the full platform string")] = False,
) -> dict:
    """Describe the machine the assistant is running on."""
    info = {"system": platform.system(), "python": platform.python_version()}
    if detail:
        info["platform"] = platform.platform()
    return info


async def main() -> None:
    """
    Chat with the built-in tools plus one custom tool, in a fixed session.
    """
    setup_logging()

    try:
        settings = AgentSettings.from_env()
    except MiniCCError as e:
        print(f"Error: {e}")
        return

    orchestrator = create_orchestrator(settings, tools=[system_info])
    print(f"Using model {settings.model} with tools: {', '.join(orchestrator.registry.names)}")

    print("\nStart chatting! Type 'exit' or 'quit' to stop.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if not user_input:
            continue

        try:
            answer = await orchestrator.chat("example", user_input)
            print(f"Assistant: {answer}")
        except MiniCCError as e:
            print(f"An error occurred: {e}")


if __name__ == "__main__":
    asyncio.run(main())
