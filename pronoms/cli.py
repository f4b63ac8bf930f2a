"""Terminal front-end — plays a session line by line.

Renders the start screen, instructions, sentence card, feedback panels and
completion summary in Catalan, and maps what the player types to session
operations. All game rules live in GameSession; this module only prints
and dispatches.

Run with: python -m pronoms [--provider local --dataset data/sentences.csv]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pronoms.config import PROVIDERS, Settings, build_provider, get_settings
from pronoms.hooks.storage import JsonFileStorage
from pronoms.session import FeedbackMode, GameSession, Phase

logger = logging.getLogger(__name__)

TITLE = "Joc dels Pronoms Febles"
TAGLINE = "Practica els pronoms febles del català de manera divertida i educativa"

INSTRUCTIONS = """\
Com es juga?

Instruccions
  1. Llegeix la frase completa que apareix
  2. Escriu la versió curta utilitzant pronoms febles
  3. Prem Retorn per veure si és correcta
  4. Si t'encalles, demana una pista (:pista) o la solució (:solucio)
  5. Llegeix l'explicació per aprendre la regla gramatical
  6. Continua amb la següent frase

Exemple
  Frase completa: "Dóna la pilota a mi"
  Frase curta:    "Dóna-me-la"

Consells
  - Posa atenció als guions i apòstrofs
  - Els pronoms febles tenen un ordre específic
  - La resposta ha de ser exacta (inclosos guions i apòstrofs)

Ordres: ? instruccions, :pista, :solucio, :reinicia, :surt
"""

QUIT = ":surt"
HINT = ":pista"
SOLUTION = ":solucio"
RESTART = ":reinicia"
HELP = "?"


class _Quit(Exception):
    pass


def _ask(prompt: str) -> str:
    try:
        text = input(prompt)
    except EOFError:
        raise _Quit() from None
    if text.strip() == QUIT:
        raise _Quit()
    return text


def _plural(count: int) -> str:
    return "intent" if count == 1 else "intents"


def render_card(session: GameSession) -> str:
    item = session.current_item
    position = (
        f"Frase: {item.item_id} de {session.total_items}"
        if session.total_items is not None
        else f"Frase: {item.item_id}"
    )
    lines = [
        "-" * 40,
        f"{position}   Intents: {session.current_attempts}   Nivell: {item.difficulty.label}",
        "Frase original:",
        f"  {item.full_form}",
    ]
    for number, hint in enumerate(session.hints.revealed, start=1):
        lines.append(f"Pista {number}: {hint}")
    return "\n".join(lines)


def render_feedback(session: GameSession) -> str:
    feedback = session.feedback
    if feedback.mode is FeedbackMode.INCORRECT:
        return "Incorrecte. Torna-ho a provar!"
    heading = "Correcte!" if feedback.mode is FeedbackMode.CORRECT else "Solució"
    lines = [heading]
    if feedback.short_form:
        lines.append(f"La resposta correcta: {feedback.short_form}")
    if feedback.explanation:
        lines.append(f"Explicació: {feedback.explanation}")
    return "\n".join(lines)


def render_summary(session: GameSession) -> str:
    lines = [
        "Enhorabona!",
        "Has completat les frases d'avui!",
        "Total d'intents per frase:",
    ]
    for item_id, count in session.summary():
        lines.append(f"  Frase {item_id}: {count} {_plural(count)}")
    lines.append("Torna demà per a un nou repte!")
    return "\n".join(lines)


async def _play_turn(session: GameSession) -> None:
    """Handles one prompt for whatever phase the session is in."""
    if session.phase is Phase.ERROR:
        print(f"Error: {session.error}")
        _ask("Prem Retorn per tornar a intentar...")
        await session.retry_load()
        return

    if session.phase is Phase.COMPLETE:
        print(render_feedback(session))
        print(render_summary(session))
        choice = _ask("Vols tornar a intentar-ho? (s/n) ")
        if choice.strip().lower().startswith("s"):
            await session.restart()
        else:
            raise _Quit()
        return

    if session.phase is Phase.SHOWING_FEEDBACK:
        print(render_feedback(session))
        if session.feedback.mode is FeedbackMode.INCORRECT:
            _ask("Prem Retorn per tornar-ho a provar...")
            session.retry()
        else:
            _ask("Prem Retorn per a la següent frase...")
            session.advance()
        return

    print(render_card(session))
    text = _ask("Escriu la frase curta: ").strip()
    if text == HELP:
        print(INSTRUCTIONS)
    elif text == HINT:
        if not session.can_request_hint:
            print("No hi ha més pistes per a aquesta frase.")
        else:
            await session.request_hint()
    elif text == SOLUTION:
        if not session.can_reveal_solution:
            print("La solució no està disponible en aquest mode.")
        else:
            await session.reveal_solution()
    elif text == RESTART:
        await session.restart()
    else:
        await session.submit(text)

    if session.error and session.phase is not Phase.ERROR:
        print(f"Error: {session.error}")


async def play(settings: Settings) -> None:
    provider = build_provider(settings)
    session = GameSession(provider, JsonFileStorage(settings.state_path))
    print(TITLE)
    print(TAGLINE)
    print("Escriu ? per veure les instruccions.\n")
    try:
        await session.start()
        while True:
            await _play_turn(session)
    except _Quit:
        print("Fins aviat!")
    finally:
        await provider.aclose()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pronoms", description=TAGLINE)
    parser.add_argument("--provider", choices=PROVIDERS, help="sentence source")
    parser.add_argument("--api", dest="api_base_url", help="quiz service base URL")
    parser.add_argument("--dataset", type=Path, help="CSV dataset for the local provider")
    parser.add_argument("--state", type=Path, help="where today's session is saved")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    base = get_settings()
    settings = Settings(
        provider=args.provider or base.provider,
        api_base_url=args.api_base_url or base.api_base_url,
        request_timeout=base.request_timeout,
        dataset_path=args.dataset or base.dataset_path,
        state_path=args.state or base.state_path,
        log_level=base.log_level,
    )
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="[%(name)s|%(levelname)s]: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpcore").setLevel(logging.INFO)
    try:
        asyncio.run(play(settings))
    except KeyboardInterrupt:
        print()
    return 0
