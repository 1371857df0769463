"""Tests for generation.cli — the interactive chat loop."""

import asyncio
import threading
from unittest.mock import AsyncMock, MagicMock

from generation import cli
from generation.service import ConversationService


def test_chat_loop_until_exit(monkeypatch, capsys):
    inputs = iter(["", "What is duty?", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
    service = MagicMock(spec=ConversationService)
    service.handle_turn = AsyncMock(return_value="Act without attachment.")

    asyncio.run(cli.chat_loop(service, "session-1"))

    service.handle_turn.assert_awaited_once_with("session-1", "What is duty?")
    assert "Act without attachment." in capsys.readouterr().out


def test_chat_loop_reads_input_off_event_loop(monkeypatch):
    reader_threads = []

    def fake_input(prompt=""):
        reader_threads.append(threading.get_ident())
        return "quit"

    monkeypatch.setattr("builtins.input", fake_input)
    service = MagicMock(spec=ConversationService)
    service.handle_turn = AsyncMock()

    asyncio.run(cli.chat_loop(service, "session-1"))

    assert reader_threads and reader_threads[0] != threading.get_ident()
    service.handle_turn.assert_not_awaited()


def test_build_service_loads_store(monkeypatch, tmp_path, gita_store):
    path = tmp_path / "embeddings.json"
    gita_store.save(path)
    config = cli.ChatConfig(embeddings_path=str(path))

    service = cli.build_service(config)

    assert len(service.retriever.store) == 2
    assert not service.memory.running
