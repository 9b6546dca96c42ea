"""Tests for note embedding maintenance."""

from typing import cast

import pytest
from sqlalchemy.exc import OperationalError

from app.repositories.note_repository import NoteRepository
from app.services.embeddings import note_embedding_text, update_note_embedding
from app.services.note_service import NoteService
from app.utils.result import FailureReason
from app.utils.vector import deserialize_vector
from helpers import FakeProvider, make_note


@pytest.fixture(name="user_id")
def user_id_fixture(test_user) -> int:
    return cast(int, test_user.id)


@pytest.mark.asyncio
async def test_embedding_is_stored_for_title_and_content(session, user_id):
    note = make_note(session, user_id, "Budget", "Quarterly numbers")
    provider = FakeProvider(default_embedding=[0.6, 0.8])
    updated_at = note.updated_at

    stored = await update_note_embedding(session, note, provider, ai_enabled=True)

    assert stored is True
    assert provider.embed_calls == ["Budget\n\nQuarterly numbers"]
    assert note.embedding is not None
    assert deserialize_vector(note.embedding).tolist() == pytest.approx([0.6, 0.8])
    assert note.updated_at == updated_at


@pytest.mark.asyncio
async def test_edit_clears_embedding_and_regeneration_uses_new_text(session, user_id):
    note = make_note(session, user_id, "Budget", "old", embedding=[1.0, 0.0])
    service = NoteService(session)

    edited = service.update_note(cast(int, note.id), user_id, content="new numbers")
    assert edited.embedding is None

    provider = FakeProvider(default_embedding=[0.0, 1.0])
    await update_note_embedding(session, edited, provider, ai_enabled=True)

    assert provider.embed_calls == [note_embedding_text(edited)]
    assert "new numbers" in provider.embed_calls[0]
    assert edited.embedding is not None


@pytest.mark.asyncio
async def test_disabled_mode_skips_provider(session, user_id):
    note = make_note(session, user_id, "Budget")
    provider = FakeProvider(default_embedding=[1.0, 0.0])

    stored = await update_note_embedding(session, note, provider, ai_enabled=False)

    assert stored is False
    assert provider.call_count == 0
    assert note.embedding is None


@pytest.mark.asyncio
async def test_provider_failure_leaves_note_unembedded(session, user_id):
    note = make_note(session, user_id, "Budget")
    provider = FakeProvider(embedding_failure=FailureReason.PROVIDER_ERROR)

    stored = await update_note_embedding(session, note, provider, ai_enabled=True)

    assert stored is False
    assert note.embedding is None


@pytest.mark.asyncio
async def test_persistence_failure_is_reported(session, user_id, monkeypatch):
    note = make_note(session, user_id, "Budget")
    provider = FakeProvider(default_embedding=[1.0, 0.0])

    def broken(self, target, embedding):
        raise OperationalError("UPDATE", {}, Exception("disk I/O error"))

    monkeypatch.setattr(NoteRepository, "save_embedding", broken)
    stored = await update_note_embedding(session, note, provider, ai_enabled=True)

    assert stored is False
