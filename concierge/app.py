import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from concierge.core.bus import Bus
from concierge.core.config import Config
from concierge.core.recorder import ChatRecorder
from concierge.core.router import Router, PipelineMode
from concierge.core.service import ChatService
from concierge.core.store import ChatStore, ReminderStore
from concierge.skills.base import Resolver
from concierge.skills.calculator import CalculatorSkill
from concierge.skills.chat import ChatSkill
from concierge.skills.clock import ClockSkill
from concierge.skills.knowledge import KnowledgeSkill
from concierge.skills.search import SearchSkill
from concierge.skills.weather import WeatherSkill


@dataclass
class Components:
    bus: Bus
    store: ChatStore
    reminders: ReminderStore
    service: ChatService
    model_skill: Resolver   # model-augmented resolver, also behind /api/search
    llm_configured: bool


def build_skills(weather=None, encyclopedia=None, web=None, llm=None) -> dict[str, Resolver]:
    """Skills keyed by intent name; missing capabilities come from Config."""
    weather = weather or Config.get_weather_lookup()
    encyclopedia = encyclopedia or Config.get_encyclopedia()
    web = web or Config.get_web_search()
    llm = llm or Config.get_language_model()

    skills: list[Resolver] = [
        WeatherSkill(weather, default_location=Config.DEFAULT_LOCATION),
        ClockSkill(),
        CalculatorSkill(),
        KnowledgeSkill(encyclopedia),
        SearchSkill(web),
        ChatSkill(llm, web),
    ]
    return {s.name: s for s in skills}


async def start_components(
    mode: Optional[PipelineMode] = None,
    store: Optional[ChatStore] = None,
    reminders: Optional[ReminderStore] = None,
    **capabilities,
) -> Components:
    """Wire skills, router, service and recorder onto a fresh bus."""
    bus = Bus()
    store = store or Config.get_chat_store()
    skills = build_skills(**capabilities)
    router = Router(skills, mode=mode or Config.PIPELINE_MODE)

    recorder = ChatRecorder(bus, store)
    await recorder.start()

    llm = skills["chat"].llm
    return Components(
        bus=bus,
        store=store,
        reminders=reminders or Config.get_reminder_store(),
        service=ChatService(router, bus),
        model_skill=skills["chat"],
        llm_configured=llm.configured,
    )


async def repl(components: Components, user_id: str = "anonymous") -> None:
    """Tiny REPL that answers typed messages through the full pipeline."""
    print("\nConcierge Interactive Mode")
    print("Type a question. Type 'quit' to exit.")

    while True:
        try:
            print("\n> ", end="", flush=True)
            # input in worker thread to keep event loop responsive
            user_input = (await asyncio.to_thread(input)).strip()

            if user_input.lower() in ["quit", "exit", "q"]:
                break
            if not user_input:
                continue

            answer = await components.service.produce_answer(user_input, user_id)
            label = f"[{answer.intent}] " if answer.intent else ""
            print(f"{label}{answer.text}")
            await components.service.record(user_id, user_input, answer)

        except KeyboardInterrupt:
            break
        except EOFError:
            break


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    print("Starting Concierge...")
    Config.print_config()
    components = await start_components()
    print("Components ready.")
    await repl(components)
    components.bus.clear()
    print("Stopped.")


if __name__ == "__main__":
    asyncio.run(main())
