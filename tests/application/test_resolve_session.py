"""Integration tests for the ResolveSession use case."""

from chatorder.application.resolve_session import ResolveSessionHandler
from tests.fakes import FakeSessionRepository


def test_missing_token_issues_new_session():
    repo = FakeSessionRepository()

    sid = ResolveSessionHandler(repo).handle(None, user_agent="pytest")

    assert sid
    assert repo.get(sid).user_agent == "pytest"


def test_each_new_visitor_gets_a_distinct_key():
    handler = ResolveSessionHandler(FakeSessionRepository())
    assert handler.handle() != handler.handle()


def test_known_token_is_kept_and_touched():
    repo = FakeSessionRepository()
    handler = ResolveSessionHandler(repo)
    sid = handler.handle()
    first_seen = repo.get(sid).last_seen_at

    again = handler.handle(sid)

    assert again == sid
    assert repo.get(sid).last_seen_at >= first_seen


def test_presented_token_is_adopted():
    repo = FakeSessionRepository()

    sid = ResolveSessionHandler(repo).handle("  cookie-sid ")

    assert sid == "cookie-sid"
    assert repo.get("cookie-sid") is not None
