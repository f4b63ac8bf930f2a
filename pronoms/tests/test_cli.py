"""Tests for pronoms.cli — rendering and a scripted terminal game."""

from dataclasses import replace
from pathlib import Path

import pytest

from pronoms.cli import play, render_card, render_feedback, render_summary
from pronoms.config import Settings
from pronoms.session import Phase


def _settings(tmp_path: Path, provider: str = "mock") -> Settings:
    return Settings(
        provider=provider,
        api_base_url="http://quiz.test",
        request_timeout=1.0,
        dataset_path=Path(__file__).resolve().parents[2] / "data" / "sentences.csv",
        state_path=tmp_path / "state.json",
        log_level="info",
    )


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    """Makes input() return lines in order, then behave like Ctrl-D."""
    pending = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(pending)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


class TestRendering:
    @pytest.mark.asyncio
    async def test_card_shows_position_and_attempts(self, make_session, mock_provider) -> None:
        session = make_session(mock_provider())
        await session.load()
        card = render_card(session)
        assert "Frase: 1 de 5" in card
        assert "Intents: 0" in card
        assert "Fàcil" in card
        assert "Dóna la pilota a mi" in card

    @pytest.mark.asyncio
    async def test_card_lists_revealed_hints(self, make_session, mock_provider) -> None:
        session = make_session(mock_provider(hints={1: ["Dos pronoms"]}))
        await session.load()
        await session.request_hint()
        assert "Pista 1: Dos pronoms" in render_card(session)

    @pytest.mark.asyncio
    async def test_feedback_variants(self, make_session, mock_provider) -> None:
        session = make_session(mock_provider())
        await session.load()
        await session.submit("malament")
        assert "Incorrecte" in render_feedback(session)
        session.retry()
        await session.submit("Dóna-me-la")
        text = render_feedback(session)
        assert "Correcte!" in text
        assert "La resposta correcta: Dóna-me-la" in text

    @pytest.mark.asyncio
    async def test_summary_pluralises(self, make_session, mock_provider) -> None:
        provider = mock_provider()
        session = make_session(provider)
        await session.load()
        session.attempts_by_item = {1: 1, 2: 3, 3: 0, 4: 0, 5: 0}
        summary = render_summary(session)
        assert "Frase 1: 1 intent" in summary
        assert "Frase 2: 3 intents" in summary


class TestPlay:
    @pytest.mark.asyncio
    async def test_full_mock_game(self, tmp_path, monkeypatch, capsys) -> None:
        _feed(monkeypatch, [
            "?",
            ":pista",
            "malament", "",
            "Dóna-me-la", "",
            "Porta-l'hi", "",
            "Compra'n", "",
            "Hi vaig", "",
            "Explica-ens-la",
            "n",
        ])
        await play(_settings(tmp_path))
        out = capsys.readouterr().out
        assert "Com es juga?" in out
        assert "Incorrecte" in out
        assert "Enhorabona!" in out
        assert "Frase 1: 2 intents" in out
        assert "Frase 5: 1 intent" in out
        assert "Fins aviat!" in out

    @pytest.mark.asyncio
    async def test_quit_command_saves_progress(self, tmp_path, monkeypatch, capsys) -> None:
        _feed(monkeypatch, ["malament", "", ":surt"])
        await play(_settings(tmp_path))
        assert (tmp_path / "state.json").exists()

        _feed(monkeypatch, [":surt"])
        await play(_settings(tmp_path))
        out = capsys.readouterr().out
        assert "Intents: 1" in out

    @pytest.mark.asyncio
    async def test_local_solution_reveal(self, tmp_path, monkeypatch, capsys) -> None:
        _feed(monkeypatch, [":solucio", "", ":pista"])
        await play(_settings(tmp_path, provider="local"))
        out = capsys.readouterr().out
        assert "Solució" in out
        assert "Frase: 2" in out
        assert "No hi ha més pistes" in out

    @pytest.mark.asyncio
    async def test_error_screen_offers_retry(self, tmp_path, monkeypatch, capsys) -> None:
        settings = replace(_settings(tmp_path, provider="local"), dataset_path=tmp_path / "missing.csv")
        _feed(monkeypatch, [""])
        await play(settings)
        out = capsys.readouterr().out
        assert "Error: No s'han pogut carregar les dades del joc" in out


def test_phase_values_are_stable() -> None:
    assert Phase.COMPLETE.value == "complete"
