"""Tests for the kg-learn CLI."""

import argparse
import json
import sys

import pytest

from kg_learn import main as cli
from kg_learn.models import SkillLevel


class TestParseSkill:
    def test_name_and_level(self):
        skill = cli._parse_skill("JavaScript=Advanced")
        assert skill.name == "JavaScript"
        assert skill.level == SkillLevel.ADVANCED

    def test_level_defaults_to_beginner(self):
        assert cli._parse_skill("Git").level == SkillLevel.BEGINNER

    def test_bad_level(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli._parse_skill("Git=guru")

    def test_missing_name(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli._parse_skill("=expert")


class TestCommands:
    def _run(self, monkeypatch, capsys, *argv):
        monkeypatch.setattr(sys, "argv", ["kg-learn", *argv])
        cli.main()
        return json.loads(capsys.readouterr().out)

    def test_shortest(self, monkeypatch, capsys):
        out = self._run(monkeypatch, capsys, "shortest", "React", "JavaScript")
        assert out["labels"] == ["React", "JavaScript"]

    def test_related(self, monkeypatch, capsys):
        out = self._run(monkeypatch, capsys, "related", "JavaScript", "--depth", "1")
        assert out[0]["label"] == "React"
        assert len(out) == 4

    def test_synthesize(self, monkeypatch, capsys):
        out = self._run(
            monkeypatch, capsys, "synthesize", "NestJS", "--skill", "JavaScript=intermediate"
        )
        assert [node["title"] for node in out["nodes"]] == [
            "Learn JavaScript",
            "Learn TypeScript",
            "Learn NestJS",
        ]

    def test_unknown_related_label_exits(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["kg-learn", "related", "Cobol"])
        with pytest.raises(SystemExit):
            cli.main()

    def test_no_command_prints_help(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["kg-learn"])
        with pytest.raises(SystemExit):
            cli.main()
