"""
Tests for the terminal interface.
"""

import argparse
import io

import pytest

from ..cli import main, cmd_play, run_interactive, render_results
from ..config import GameConfig
from ..session import GameController


def play(controller, *lines):
    out = io.StringIO()
    run_interactive(controller, list(lines), out)
    return out.getvalue()


class TestInteractive:
    """Tests for run_interactive."""

    def test_initial_render(self, controller):
        output = play(controller)

        assert "Question 1 of 2" in output
        assert "60s (paused)" in output
        assert "  1. [+10] Works with dough - Kim" in output
        assert "  2. [+5] Gets up early - Sam" in output
        assert "Baker" not in output

    def test_vote_by_rank(self, controller):
        play(controller, "up 2", "up 2")
        assert controller.state.catalog.get(1).get_description("a").votes == 7

    def test_add_and_delete(self, controller):
        output = play(controller, "add Ana: Kneads bread", "del 1")

        job = controller.state.catalog.get(1)
        assert [d.text for d in job.descriptions] == ["Gets up early", "Kneads bread"]
        assert "* Ana added a description to job 1" in output

    def test_add_blank_shows_error(self, controller):
        output = play(controller, "add Ana:")

        assert "! " in output
        assert controller.state.catalog.get(1).count == 2

    def test_bad_rank(self, controller):
        output = play(controller, "up 9", "down x")

        assert "! No description ranked 9" in output
        assert "! Give the rank number of a description" in output

    def test_timer_commands(self, controller):
        output = play(controller, "start", "tick 5")

        assert controller.state.timer.remaining_seconds == 55
        assert "55s (running)" in output

    def test_play_to_results(self, controller):
        output = play(controller, "results", "next", "next", "prev")

        assert "No results until the last question is done." in output
        assert "Results" in output
        assert "Baker" in output
        assert "Pilot" in output
        assert "Type 'restart' to play again." in output
        assert "! Session is complete" in output

    def test_quit_stops_reading(self, controller):
        play(controller, "quit", "next")
        assert controller.state.current_index == 0

    def test_unknown_command(self, controller):
        output = play(controller, "dance")
        assert "! Unknown command: dance" in output


class TestRender:
    """Tests for render helpers."""

    def test_empty_job(self, empty_job_catalog):
        output = play(GameController.create(empty_job_catalog))
        assert "No descriptions yet. Be the first to add one!" in output

    def test_render_results_empty(self):
        out = io.StringIO()
        render_results((), out)
        assert out.getvalue().strip() == "No results until the last question is done."


class TestMain:
    """Tests for the argparse entry point."""

    def test_catalog_hides_titles(self, capsys, monkeypatch):
        monkeypatch.delenv("JOBGUESS_CATALOG_PATH", raising=False)
        main(["catalog"])

        output = capsys.readouterr().out
        assert output.startswith("2 jobs")
        assert "???" in output
        assert "Software Engineer" not in output

    def test_catalog_reveal(self, capsys, monkeypatch):
        monkeypatch.delenv("JOBGUESS_CATALOG_PATH", raising=False)
        main(["catalog", "--reveal"])

        assert "Software Engineer" in capsys.readouterr().out

    @pytest.mark.parametrize("timer", ["0", "-5"])
    def test_play_rejects_bad_timer(self, capsys, timer):
        """Out-of-range --timer values are reported, not ignored."""
        with pytest.raises(SystemExit) as exc:
            main(["play", "--timer", timer])

        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_play_uses_timer_override(self):
        out = io.StringIO()
        args = argparse.Namespace(catalog=None, timer=5, expiry=None)

        cmd_play(args, GameConfig(), stdin=["quit"], out=out)

        assert "5s (paused)" in out.getvalue()

    def test_invalid_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("JOBGUESS_TIMER_SECONDS", "soon")

        with pytest.raises(SystemExit):
            main(["catalog"])

        assert "Invalid configuration" in capsys.readouterr().out
