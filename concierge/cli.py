import asyncio
import logging
import typer

from concierge.app import main as app_main, start_components
from concierge.core.config import Config
from concierge.core.errors import MessageRequired
from concierge.core.nlu.rules import RulesNLU

app = typer.Typer(help="Concierge CLI")

@app.command("ask")
def ask(
    message: str,
    mode: str = typer.Option(None, "--mode", "-m", help="rules or model (defaults to PIPELINE_MODE)"),
    user: str = typer.Option("anonymous", "--user", "-u"),
):
    """Answer MESSAGE once and print the reply."""
    async def _ask():
        components = await start_components(mode=mode)
        answer = await components.service.produce_answer(message, user)
        await components.service.record(user, message, answer)
        return answer

    try:
        answer = asyncio.run(_ask())
    except MessageRequired as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=2)
    if answer.intent:
        typer.echo(f"[{answer.intent}] {answer.text}")
    else:
        typer.echo(answer.text)

@app.command("classify")
def classify(text: str):
    """Print the intent the rules assign to TEXT."""
    result = RulesNLU().classify(text)
    typer.echo(f"{result.intent.value} ({result.confidence:.2f})")

@app.command("serve")
def serve(
    host: str = typer.Option(None, "--host"),
    port: int = typer.Option(None, "--port", "-p"),
):
    """Run the HTTP API."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    uvicorn.run(
        "concierge.server:app",
        host=host or Config.SERVER_HOST,
        port=port or Config.SERVER_PORT,
    )

@app.command("run")
def run_repl():
    """Run Concierge in interactive mode."""
    asyncio.run(app_main())


if __name__ == "__main__":
    app()
