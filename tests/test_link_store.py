"""
Tests for the link store business logic, run directly against the database.
"""
import pytest

from snaplink_app.exceptions import DuplicateCodeError, LinkValidationError, StorageError
from snaplink_app.services.link_store import LinkStore
from snaplink_app.services.validation import is_valid_code


class TestLinkStore:

    def test_create_generates_code(self, db_session):
        store = LinkStore(db_session)

        link = store.create("https://www.example.com")

        assert link.id is not None
        assert len(link.code) == 6
        assert is_valid_code(link.code)
        assert link.long_url == "https://www.example.com"
        assert link.total_clicks == 0
        assert link.last_clicked is None
        assert link.created_at is not None

    def test_create_keeps_custom_code(self, db_session):
        store = LinkStore(db_session)

        link = store.create("https://docs.python.org/3/", "pyDocs3")

        assert link.code == "pyDocs3"
        assert store.get_by_code("pyDocs3").long_url == "https://docs.python.org/3/"

    def test_duplicate_code_rejected(self, db_session):
        store = LinkStore(db_session)
        store.create("https://www.example.com", "taken1")

        with pytest.raises(DuplicateCodeError) as exc_info:
            store.create("https://www.other.com", "taken1")

        assert exc_info.value.code == "taken1"
        assert str(exc_info.value) == "Code 'taken1' already exists"
        # Session is usable after the rollback and the first link is intact
        assert store.get_by_code("taken1").long_url == "https://www.example.com"
        assert len(store.list_all()) == 1

    def test_create_rejects_malformed_input(self, db_session):
        store = LinkStore(db_session)

        with pytest.raises(LinkValidationError):
            store.create("not-a-valid-url")
        with pytest.raises(LinkValidationError):
            store.create("https://www.example.com", "bad-code")
        with pytest.raises(LinkValidationError):
            store.create("https://www.example.com", "abc")

        assert store.list_all() == []

    def test_get_missing_code_returns_none(self, db_session):
        store = LinkStore(db_session)
        assert store.get_by_code("nothere") is None

    def test_list_all_newest_first(self, db_session):
        store = LinkStore(db_session)
        first = store.create("https://one.example.com", "first1")
        second = store.create("https://two.example.com", "second2")
        third = store.create("https://three.example.com", "third3")

        codes = [link.code for link in store.list_all()]

        assert codes == [third.code, second.code, first.code]

    def test_list_all_empty(self, db_session):
        assert LinkStore(db_session).list_all() == []

    def test_increment_clicks(self, db_session):
        store = LinkStore(db_session)
        store.create("https://www.example.com", "click1")

        store.increment_clicks("click1")
        store.increment_clicks("click1")

        link = store.get_by_code("click1")
        db_session.refresh(link)
        assert link.total_clicks == 2
        assert link.last_clicked is not None

    def test_increment_missing_code_is_noop(self, db_session):
        store = LinkStore(db_session)
        store.increment_clicks("ghost1")  # should not raise
        assert store.get_by_code("ghost1") is None

    def test_delete(self, db_session):
        store = LinkStore(db_session)
        store.create("https://www.example.com", "gone01")

        assert store.delete("gone01") is True
        assert store.get_by_code("gone01") is None
        assert store.delete("gone01") is False

    def test_storage_failure_raises_storage_error(self, broken_session):
        store = LinkStore(broken_session)

        with pytest.raises(StorageError):
            store.list_all()
        with pytest.raises(StorageError):
            store.get_by_code("abc123")
        with pytest.raises(StorageError):
            store.increment_clicks("abc123")
        with pytest.raises(StorageError):
            store.delete("abc123")
        with pytest.raises(StorageError):
            store.create("https://www.example.com", "abc123")

    def test_reload_failure_after_commit_raises_storage_error(self, lost_after_commit_session):
        store = LinkStore(lost_after_commit_session)

        with pytest.raises(StorageError) as exc_info:
            store.create("https://www.example.com", "abc123")

        assert "create" in str(exc_info.value)

    def test_failed_rollback_still_raises_storage_error(self, dead_connection_session):
        """The original database error is wrapped even when rollback fails"""
        store = LinkStore(dead_connection_session)

        with pytest.raises(StorageError):
            store.increment_clicks("abc123")
        with pytest.raises(StorageError):
            store.create("https://www.example.com", "abc123")
