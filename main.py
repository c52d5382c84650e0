# =============================================================================
# main.py  —  Interactive Odoo Explorer
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads .env and reads the Odoo settings (core/config.py)
#   2. Creates the Google ADK explorer agent (agent/explorer_agent.py), which
#      spawns the MCP tool server (tools/mcp_server.py) over stdio
#   3. Reads questions from the terminal and streams them to the agent
#   4. Prints the tools the agent calls and its final answer
#
#   To use the tools from another MCP client (an IDE, a desktop assistant)
#   run the server alone instead:  python -m tools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Load environment variables from .env file (ODOO_*, OPENROUTER_API_KEY, ...)
# BEFORE reading settings; LiteLlm also reads its API key from the environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.explorer_agent import create_agent
from core.config import load_settings

APP_NAME = "odoo_explorer"
USER_ID = "local_user"


async def run_agent():
    """Run the explorer agent in an interactive question loop."""
    settings = load_settings()

    print("=" * 70)
    print("  ODOO MODEL EXPLORER")
    print(f"  {settings.url}  (db: {settings.database}, user: {settings.username})")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent(settings)

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask about your Odoo data (type 'quit' to exit)")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
