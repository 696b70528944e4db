#!/usr/bin/env python3
"""
Pedigree assistant demo: scripted conversations, then an interactive chat
over the in-memory sample store.
"""

import argparse
import asyncio
import logging
import os
import sys

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from pedigree_flow import config
from pedigree_flow.chatbot_pipeline import PedigreeChatPipeline
from pedigree_flow.faq_cache import drain_background_tasks
from pedigree_flow.llm import build_advisor
from pedigree_flow.models import AIResponse
from pedigree_flow.pet_data import InMemoryPetStore

SCENARIOS = [
    {
        "name": "Global search and focus",
        "messages": ["hi", "find Apollo", "documents", "yes", "who is the owner"],
    },
    {
        "name": "Market and listings",
        "messages": ["ราคาตลาดเท่าไหร่", "any puppies for sale?", "breeding matches"],
    },
    {
        "name": "Breeding",
        "messages": ["breed Apollo with Luna", "find mate for Apollo"],
    },
    {
        "name": "Registration and context reset",
        "messages": ["I want to register my new puppy", "find Bella", "reset"],
    },
]


def print_response(response: AIResponse, indent: str = "   ") -> None:
    for line in response.text.splitlines() or [""]:
        print(f"{indent}{line}")
    for pet in response.pets:
        tag = " [For Sale]" if pet.get("for_sale") or pet.get("status") == "available" else ""
        print(f"{indent}  • {pet.get('name')} ({pet.get('breed')}){tag}")
    for action in response.actions:
        marker = "*" if action.primary else "-"
        print(f"{indent}  {marker} [{action.type}] {action.label} -> {action.value}")
    for followup in response.followups:
        print_response(followup, indent)


async def run_scenarios(pipeline: PedigreeChatPipeline) -> None:
    print("🐾 Pedigree Assistant Demo")
    print("=" * 50)
    for scenario in SCENARIOS:
        print(f"\n📋 {scenario['name']}")
        print("-" * 50)
        pipeline.reset()
        for i, message in enumerate(scenario["messages"], 1):
            print(f"\n{i}. User: {message}")
            response = await pipeline.handle_message(message)
            print("   Assistant:")
            print_response(response)
            active = pipeline.context.active_pet
            if active:
                print(f"   (focus: {active.name})")
    await drain_background_tasks()


async def run_interactive(pipeline: PedigreeChatPipeline) -> None:
    print("\n💬 Interactive chat (type 'quit' to exit)")
    print("=" * 50)
    loop = asyncio.get_running_loop()
    while True:
        try:
            user_input = await loop.run_in_executor(None, input, "\nYou: ")
        except (EOFError, KeyboardInterrupt):
            break
        if user_input.strip().lower() in ("quit", "exit", "bye"):
            break
        response = await pipeline.handle_message(user_input)
        print("Assistant:")
        print_response(response)
    await drain_background_tasks()
    print("👋 Goodbye!")


async def main(interactive: bool) -> None:
    store = InMemoryPetStore()
    advisor = build_advisor()
    if advisor is None:
        print("ℹ️  OPENAI_API_KEY not set - advisor answers will use fallback texts")
    pipeline = PedigreeChatPipeline(store, advisor=advisor)

    await run_scenarios(pipeline)
    if interactive:
        pipeline.reset()
        await run_interactive(pipeline)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Pedigree assistant demo")
    parser.add_argument("--no-interactive", action="store_true", help="run the scripted scenarios only")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main(interactive=not args.no_interactive))
