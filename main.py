# =============================================================================
# main.py  —  Creator Fusion Analyst Console
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py        (or: creator-fusion-console)
#
# WHAT HAPPENS:
#   1. Loads .env (APIFY_TOKEN for the gateway, OPENROUTER_API_KEY for the LLM)
#   2. Creates the ADK analyst agent (agent/creator_agent.py), which spawns
#      the MCP gateway (tools/mcp_server.py) as a stdio subprocess
#   3. Reads a question, streams the agent's events, prints each tool call
#      and the final answer
#   4. Repeats until quit / exit / q / Ctrl-D
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm reads its API key from the
# environment at construction time.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.creator_agent import create_agent

APP_NAME = "creator_fusion"
USER_ID = "analyst"
EXIT_COMMANDS = ("quit", "exit", "q")


async def ask(runner: Runner, session_id: str, question: str) -> str:
    """Send one question to the agent and return its final text answer."""
    message = types.Content(role="user", parts=[types.Part(text=question)])

    final_response = ""
    async for event in runner.run_async(user_id=USER_ID, session_id=session_id, new_message=message):
        if not (event.content and event.content.parts):
            continue
        for part in event.content.parts:
            if getattr(part, "function_call", None):
                print(f"  🔧 Calling tool: {part.function_call.name}")
            if getattr(part, "text", None):
                final_response = part.text
    return final_response


async def run_console():
    print("=" * 70)
    print("  CREATOR FUSION ANALYST")
    print("  Google ADK + LiteLlm + FastMCP gateway")
    print("=" * 70)
    print("\n🔧 Initializing agent...")

    agent = create_agent()
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent ready. Ask about a creator, e.g. \"Is @khaby.lame worth $5k a post?\"")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            question = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if question.lower() in EXIT_COMMANDS:
            print("\n👋 Goodbye!")
            break
        if not question:
            continue

        print("\n🤖 Agent is working...\n")
        print("-" * 70)
        answer = await ask(runner, session.id, question)
        print("-" * 70)
        if answer:
            print(f"\n🤖 Agent:\n\n{answer}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")
        print("\n" + "=" * 70)


def main() -> None:
    asyncio.run(run_console())


if __name__ == "__main__":
    main()
