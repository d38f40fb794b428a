"""Integration tests for the sillogismi MCP server tools."""

import json

import pytest

pytest.importorskip("mcp", reason="mcp package requires Python 3.10+")

from sillogismi import KnowledgeSession
from sillogismi_mcp.server import (
    sillogismi_inverse_query,
    sillogismi_process,
    sillogismi_query,
    sillogismi_save,
)
import sillogismi_mcp.server as server_module


@pytest.fixture(autouse=True)
def fresh_session(tmp_path):
    """Give each test a fresh session backed by a temporary file."""
    session = KnowledgeSession(tmp_path / "facts.json")
    server_module._session = session
    yield session
    server_module._session = None


class TestProcess:
    def test_statement(self):
        result = json.loads(sillogismi_process("Il gatto è un animale"))
        assert result["answer"] == "Ok."
        assert result["ended"] is False
        assert result["subjects"] == 1

    def test_question(self):
        sillogismi_process("Il gatto è un felino")
        sillogismi_process("Il felino è un animale")
        result = json.loads(sillogismi_process("Cosa sai sul gatto?"))
        assert result["answer"] == "un felino\nun animale"

    def test_goodbye_saves_and_reports_end(self, fresh_session):
        sillogismi_process("Il gatto è un animale")
        result = json.loads(sillogismi_process("Ciao"))
        assert result["answer"] == "Ciao."
        assert result["ended"] is True
        assert fresh_session.path.exists()

    def test_empty(self):
        result = json.loads(sillogismi_process(""))
        assert result["answer"] == "Hai scritto qualcosa?"
        assert result["subjects"] == 0


class TestQueries:
    def test_forward(self):
        sillogismi_process("Il gatto è un felino")
        sillogismi_process("Il felino è un animale")
        result = json.loads(sillogismi_query("il gatto"))
        assert result["key"] == "GATTO"
        assert result["found"] == 2
        assert result["results"] == ["un felino", "un animale"]

    def test_inverse(self):
        sillogismi_process("Il gatto è un felino")
        sillogismi_process("Il felino è un animale")
        result = json.loads(sillogismi_inverse_query("animale"))
        assert result["results"] == ["FELINO", "GATTO"]

    def test_nothing_found(self):
        assert json.loads(sillogismi_query("cane"))["found"] == 0
        assert json.loads(sillogismi_inverse_query("cane"))["found"] == 0


def test_save(fresh_session):
    sillogismi_process("Il gatto è un animale")
    result = json.loads(sillogismi_save())
    assert result["saved"] is True
    assert result["path"] == str(fresh_session.path)
    reloaded = KnowledgeSession(fresh_session.path)
    assert reloaded.store.to_dict() == {"GATTO": ["un animale"]}
