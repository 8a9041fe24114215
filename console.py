"""
Interactive console chat against the DeepSeek API.

Commands: /clear, /history, /debug (next message with debug output), exit, quit.
"""
import asyncio

import httpx

from config import Config
from services.chat_client import DeepSeekClient
from utils.errors import ChatAPIError


def _attach_printers(client: DeepSeekClient) -> None:
    events = client.events
    events.chunk_received.subscribe(lambda chunk: print(chunk, end="", flush=True))
    events.error.subscribe(lambda error: print(f"\n[ERROR] {error}"))
    events.debug_info.subscribe(lambda info: print(f"[DEBUG] {info}"))
    events.token_usage.subscribe(
        lambda usage: print(
            f"\n[USAGE] Tokens: {usage.total_tokens} "
            f"(Prompt: {usage.prompt_tokens}, Completion: {usage.completion_tokens})"
        )
    )


async def run_console() -> None:
    print("DeepSeek Console Chat")
    print("=====================")

    async with DeepSeekClient(Config.DEEPSEEK_API_KEY, Config.build_client_options()) as client:
        _attach_printers(client)
        debug_next = False

        while True:
            user_input = (await asyncio.to_thread(input, "\n\nYou: ")).strip()

            if not user_input:
                continue

            command = user_input.lower()
            if command in ("exit", "quit"):
                break
            if command == "/clear":
                client.clear_history()
                print("History cleared.")
                continue
            if command == "/history":
                for message in client.get_history():
                    print(f"  {message.role}: {message.content}")
                print(f"({client.history_count} message(s))")
                continue
            if command == "/debug":
                debug_next = True
                print("Next message will be sent with debug output.")
                continue

            print("Assistant: ", end="", flush=True)
            try:
                if debug_next:
                    debug_next = False
                    result = await client.send_message_with_debug(user_input)
                    reason = result.finish_reason.value if result.finish_reason else "none"
                    print(f"\n[Finish reason: {reason}]")
                else:
                    await client.send_message(user_input)
            except ChatAPIError as e:
                print(f"\nError: {e}")
            except httpx.HTTPError as e:
                print(f"\nConnection error: {e}")

    print("\nGoodbye!")


def main() -> None:
    try:
        asyncio.run(run_console())
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")


if __name__ == "__main__":
    main()
