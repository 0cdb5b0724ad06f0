"""Tests for the deletion confirmation UI (cli/prompt.py).

``questionary`` is mocked to avoid terminal interaction.  No Rich
rendering assertions are needed — we test the mapping between the
user's answer and the returned value.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from liveroot.cli.prompt import _build_question, _describe_scope, confirm_deletion


def _questionary_answering(answer: bool | None) -> MagicMock:
    questionary = MagicMock()
    questionary.confirm.return_value.ask.return_value = answer
    return questionary


class TestPresentationHelpers:
    def test_scope(self) -> None:
        assert _describe_scope(False) == "directory and contents"
        assert _describe_scope(True) == "contents only"

    def test_question(self) -> None:
        assert _build_question(Path("/run/cow"), False) == "Delete /run/cow?"
        assert _build_question(Path("/run/cow"), True) == (
            "Delete everything inside /run/cow?"
        )


class TestConfirmDeletion:
    @pytest.mark.parametrize(
        ("answer", "expected"),
        [(True, True), (False, False), (None, False)],
    )
    def test_answer_mapping(self, answer: bool | None, expected: bool) -> None:
        questionary = _questionary_answering(answer)
        with patch("liveroot.cli.prompt._import_questionary", return_value=questionary):
            assert confirm_deletion(Path("/run/cow"), 2048) is expected

    def test_defaults_to_no(self) -> None:
        questionary = _questionary_answering(True)
        with patch("liveroot.cli.prompt._import_questionary", return_value=questionary):
            confirm_deletion(Path("/run/cow"), None, keep_root=True)

        args, kwargs = questionary.confirm.call_args
        assert args[0] == "Delete everything inside /run/cow?"
        assert kwargs["default"] is False
