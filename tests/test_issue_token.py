from __future__ import annotations

import pytest

from gazetteer.core.config import settings
from gazetteer.core.security import verify_token
from gazetteer.scripts import issue_token


def test_prints_a_token_the_api_accepts(capsys) -> None:
    assert issue_token.main(["admin@example.com"]) == 0

    token = capsys.readouterr().out.strip()
    assert verify_token(token) == {"sub": "admin@example.com"}


def test_blank_subject_is_refused(capsys) -> None:
    assert issue_token.main(["  "]) == 1
    assert capsys.readouterr().out == ""


def test_default_secret_is_refused_outside_dev(monkeypatch, capsys) -> None:
    monkeypatch.setattr(settings, "SECRET_KEY", "CHANGE_ME")
    monkeypatch.setattr(settings, "ENV", "prod")

    assert issue_token.main(["admin@example.com"]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("env", ["dev", "prod"])
def test_configured_secret_works_everywhere(monkeypatch, capsys, env) -> None:
    monkeypatch.setattr(settings, "SECRET_KEY", "a-real-secret")
    monkeypatch.setattr(settings, "ENV", env)

    assert issue_token.main(["admin@example.com"]) == 0
    assert capsys.readouterr().out.strip()
