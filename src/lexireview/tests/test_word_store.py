"""Tests for the word store."""
import asyncio
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from lexireview.models.review_models import Difficulty, SaveResult, WriteResult
from lexireview.models.models import SavedWord
from lexireview.services.word_store import WordStore, parse_difficulty
from lexireview.tests.conftest import TODAY, fake, make_word

USER_ID = "user-1"


@pytest.mark.asyncio
async def test_insert_and_list(store: WordStore) -> None:
    """Test saving words and listing them back, newest first."""
    older = make_word("Happy", "feeling pleasure", date_added=TODAY - timedelta(days=2))
    newer = make_word("brave", "ready to face danger", date_added=TODAY)

    assert await store.insert_word(USER_ID, older) == SaveResult.SAVED
    assert await store.insert_word(USER_ID, newer) == SaveResult.SAVED

    words = await store.list_words(USER_ID)
    assert [word.word for word in words] == ["Brave", "Happy"]
    assert words[1].meaning == "feeling pleasure"
    assert words[1].difficulty == Difficulty.NORMAL
    assert words[1].last_reviewed is None
    assert words[1].date_added == TODAY - timedelta(days=2)


@pytest.mark.asyncio
async def test_words_are_scoped_per_user(store: WordStore) -> None:
    """Test that users only see their own words."""
    await store.insert_word(USER_ID, make_word("Happy"))
    await store.insert_word("user-2", make_word("Happy"))
    await store.insert_word("user-2", make_word("Brave"))

    assert len(await store.list_words(USER_ID)) == 1
    assert len(await store.list_words("user-2")) == 2


@pytest.mark.asyncio
async def test_duplicate_word_is_a_conflict(store: WordStore) -> None:
    """Test that a word differing only in case is rejected."""
    assert await store.insert_word(USER_ID, make_word("Happy")) == SaveResult.SAVED
    assert await store.insert_word(USER_ID, make_word("HAPPY")) == SaveResult.CONFLICT
    assert await store.word_exists(USER_ID, "happy")
    assert not await store.word_exists(USER_ID, "sad")
    assert len(await store.list_words(USER_ID)) == 1


@pytest.mark.asyncio
async def test_concurrent_inserts_save_once(store: WordStore) -> None:
    """Test that concurrent saves of one new word store it only once."""
    results = await asyncio.gather(
        *(store.insert_word(USER_ID, make_word("Swift")) for _ in range(5))
    )
    assert results.count(SaveResult.SAVED) == 1
    assert results.count(SaveResult.CONFLICT) == 4
    assert len(await store.list_words(USER_ID)) == 1


@pytest.mark.asyncio
async def test_update_difficulty(store: WordStore) -> None:
    """Test toggling the difficulty flag keeps the counters."""
    await store.insert_word(USER_ID, make_word("Happy", correct_count=2, wrong_count=1))

    assert await store.update_difficulty(USER_ID, "happy", Difficulty.DIFFICULT) == WriteResult.OK
    [word] = await store.list_words(USER_ID)
    assert word.difficulty == Difficulty.DIFFICULT
    assert (word.correct_count, word.wrong_count) == (2, 1)

    assert await store.update_difficulty(USER_ID, "missing", Difficulty.NORMAL) == WriteResult.FAILED


@pytest.mark.asyncio
async def test_record_answer(store: WordStore) -> None:
    """Test recording answers updates counters and review date."""
    await store.insert_word(USER_ID, make_word("Happy", correct_count=2, wrong_count=1))

    updated = await store.record_answer(USER_ID, "Happy", True, TODAY)
    assert (updated.correct_count, updated.wrong_count, updated.last_reviewed) == (3, 1, TODAY)

    updated = await store.record_answer(USER_ID, "happy", False, TODAY + timedelta(days=1))
    assert (updated.correct_count, updated.wrong_count) == (3, 2)
    assert updated.last_reviewed == TODAY + timedelta(days=1)

    [stored] = await store.list_words(USER_ID)
    assert stored == updated


@pytest.mark.asyncio
async def test_record_answer_for_missing_word(store: WordStore) -> None:
    """Test recording an answer for an unknown word returns None."""
    assert await store.record_answer(USER_ID, "missing", True, TODAY) is None


@pytest.mark.asyncio
async def test_delete_word(store: WordStore) -> None:
    """Test deleting a word discards it."""
    await store.insert_word(USER_ID, make_word("Happy"))

    assert await store.delete_word(USER_ID, "HAPPY") == WriteResult.OK
    assert await store.list_words(USER_ID) == []
    assert await store.delete_word(USER_ID, "happy") == WriteResult.FAILED

    # The word can be saved again with a fresh history
    assert await store.insert_word(USER_ID, make_word("Happy")) == SaveResult.SAVED


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [None, ""])
async def test_unauthenticated_user(store: WordStore, user_id) -> None:
    """Test that an unauthenticated user can neither read nor write."""
    assert await store.list_words(user_id) == []
    assert await store.insert_word(user_id, make_word()) == SaveResult.FAILED
    assert await store.word_exists(user_id, fake.word()) is False
    assert await store.update_difficulty(user_id, "x", Difficulty.DIFFICULT) == WriteResult.FAILED
    assert await store.record_answer(user_id, "x", True, TODAY) is None
    assert await store.delete_word(user_id, "x") == WriteResult.FAILED


@pytest.mark.asyncio
async def test_store_unavailable_degrades(broken_session_factory) -> None:
    """Test that database errors degrade to empty results."""
    store = WordStore(broken_session_factory)

    assert await store.list_words(USER_ID) == []
    assert await store.word_exists(USER_ID, "happy") is False
    assert await store.insert_word(USER_ID, make_word()) == SaveResult.FAILED
    assert await store.update_difficulty(USER_ID, "happy", Difficulty.DIFFICULT) == WriteResult.FAILED
    assert await store.record_answer(USER_ID, "happy", True, TODAY) is None
    assert await store.delete_word(USER_ID, "happy") == WriteResult.FAILED


@pytest.mark.asyncio
async def test_store_error_is_counted(store: WordStore, mocker) -> None:
    """Test that store errors are logged and counted."""
    mock_counter = mocker.patch("lexireview.services.word_store.monitoring.store_errors")
    mocker.patch.object(store, "_get_row", side_effect=OperationalError("SELECT", {}, Exception("down")))

    assert await store.update_difficulty(USER_ID, "happy", Difficulty.DIFFICULT) == WriteResult.FAILED
    mock_counter.labels.assert_called_once_with(operation="update_difficulty")
    mock_counter.labels.return_value.inc.assert_called_once()


@pytest.mark.asyncio
async def test_concurrent_answers_are_all_counted(store: WordStore) -> None:
    """Test that overlapping answers for one word each add one to its counters."""
    await store.insert_word(USER_ID, make_word("Happy", correct_count=2, wrong_count=1))

    results = await asyncio.gather(
        store.record_answer(USER_ID, "Happy", True, TODAY),
        store.record_answer(USER_ID, "Happy", True, TODAY),
        store.record_answer(USER_ID, "Happy", False, TODAY),
    )
    assert all(result is not None for result in results)

    [stored] = await store.list_words(USER_ID)
    assert (stored.correct_count, stored.wrong_count) == (4, 2)
    assert stored.last_reviewed == TODAY


@pytest.mark.asyncio
async def test_unknown_difficulty_reads_as_normal(store: WordStore, session_factory) -> None:
    """Test that an unexpected stored difficulty does not break listing."""
    async with session_factory() as db:
        db.add(SavedWord(
            user_id=USER_ID,
            word="Happy",
            word_key="happy",
            meaning="feeling pleasure",
            difficulty="very hard",
            date_added=TODAY,
        ))
        await db.commit()

    [word] = await store.list_words(USER_ID)
    assert word.word == "Happy"
    assert word.difficulty == Difficulty.NORMAL


def test_parse_difficulty():
    assert parse_difficulty("difficult") == Difficulty.DIFFICULT
    assert parse_difficulty("normal") == Difficulty.NORMAL
    assert parse_difficulty(None) == Difficulty.NORMAL
    assert parse_difficulty("") == Difficulty.NORMAL
    assert parse_difficulty("unknown") == Difficulty.NORMAL
