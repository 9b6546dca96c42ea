"""Tests for the keyword fallback search."""

from app.models import Note
from app.services.keyword_search import KeywordSearchEngine, extract_search_terms


def _note(note_id: int, title: str, content: str = "") -> Note:
    return Note(id=note_id, user_id=1, title=title, content=content)


def test_extract_terms_drops_time_phrases_and_short_words():
    terms = extract_search_terms("Notes from YESTERDAY about the budget on Q3")
    assert terms == ["notes", "from", "about", "the", "budget"]


def test_extract_terms_keeps_repeats():
    assert extract_search_terms("budget budget") == ["budget", "budget"]


def test_scores_one_point_per_term_in_title_or_content():
    engine = KeywordSearchEngine()
    both = _note(1, "Budget", "budget review")
    terms = extract_search_terms("budget review")
    assert engine.score(terms, both) == 2
    assert engine.score(["budget"], both) == 1


def test_ranks_by_match_count_and_drops_zero_scores():
    candidates = [
        _note(1, "Groceries", "milk and eggs"),
        _note(2, "Project kickoff", "plan the project budget"),
        _note(3, "Budget", "quarterly numbers"),
    ]
    results = KeywordSearchEngine().search("project budget", candidates, limit=5)

    assert [r.note.id for r in results] == [2, 3]
    assert [r.score for r in results] == [2, 1]


def test_ties_keep_candidate_order():
    candidates = [_note(i, f"Budget {i}") for i in (7, 3, 9)]
    results = KeywordSearchEngine().search("budget", candidates, limit=5)
    assert [r.note.id for r in results] == [7, 3, 9]


def test_limit_truncates_to_highest_scores():
    candidates = [
        _note(1, "alpha"),
        _note(2, "alpha beta gamma"),
        _note(3, "alpha beta"),
        _note(4, "alpha beta gamma delta"),
        _note(5, "alpha"),
    ]
    results = KeywordSearchEngine().search("alpha beta gamma delta", candidates, limit=2)
    assert [r.note.id for r in results] == [4, 2]


def test_limit_above_matches_returns_all_without_padding():
    candidates = [_note(1, "Budget"), _note(2, "Other")]
    results = KeywordSearchEngine().search("budget", candidates, limit=10)
    assert [r.note.id for r in results] == [1]


def test_no_matches_returns_empty_list():
    candidates = [_note(1, "Groceries", "milk")]
    assert KeywordSearchEngine().search("project plan", candidates, limit=5) == []


def test_query_of_only_short_words_matches_nothing():
    candidates = [_note(1, "a to do list")]
    assert KeywordSearchEngine().search("to do", candidates, limit=5) == []


def test_search_is_deterministic():
    candidates = [_note(i, f"budget {'plan ' * (i % 3)}") for i in range(10)]
    engine = KeywordSearchEngine()
    first = engine.search("budget plan", candidates, limit=5)
    second = engine.search("budget plan", candidates, limit=5)
    assert [(r.note.id, r.score) for r in first] == [(r.note.id, r.score) for r in second]
