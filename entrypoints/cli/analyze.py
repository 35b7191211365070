# entrypoints/cli/analyze.py
from __future__ import annotations

import json
import sys
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv
from loguru import logger

from dealscore.adapters.config import AppConfig
from dealscore.adapters.logging_utils import route_logs_to
from dealscore.services.deal_analyzer import analyze_deal
from dealscore.services.narrative import StaticNarrativeProvider, make_narrative_provider
from dealscore.services.validation import DealValidationError

app = typer.Typer(help="Score a single real-estate deal from the shell.")


@app.command()
def analyze(
    price: Optional[float] = typer.Option(None, help="Purchase price (required)"),
    arv: Optional[float] = typer.Option(None, help="After-repair value"),
    rent: Optional[float] = typer.Option(None, help="Monthly rent"),
    repairs: Optional[float] = typer.Option(None, help="Repair budget"),
    address: Optional[str] = typer.Option(None, help="Property address (informational)"),
    narrative: bool = typer.Option(
        True,
        "--narrative/--no-narrative",
        help="Ask Mistral for verdict/summary text when an API key is configured.",
    ),
) -> None:
    """
    Print the same JSON document POST /api/analyze returns.
    """
    load_dotenv(find_dotenv(usecwd=True))
    # stdout is reserved for the JSON result
    route_logs_to(sys.stderr)

    payload = {"price": price, "arv": arv, "rent": rent, "repairs": repairs, "address": address}
    narrator = make_narrative_provider(AppConfig()) if narrative else StaticNarrativeProvider()

    try:
        result = analyze_deal(payload, narrator=narrator)
    except DealValidationError as e:
        logger.error("Invalid deal input: {}", e)
        typer.echo(json.dumps({"error": str(e)}))
        raise typer.Exit(code=2)

    logger.info("Scored deal {} -> {}/100 ({})", address or "<no address>", result["score"], result["verdict"])
    typer.echo(json.dumps(result, indent=2))


if __name__ == "__main__":
    app()
