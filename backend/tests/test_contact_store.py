"""Tests for the contact store adapter: typed outcomes instead of exceptions."""

from app.services.contact_store import ContactStore, Duplicate, Found, NotFound


def _document(contact_id="c1", owner="u1", first_name="Ann", **fields):
    return {"id": contact_id, "owner": owner, "firstName": first_name, **fields}


class TestInsert:
    def test_returns_stored_document(self, db):
        outcome = ContactStore(db).insert(_document(email="ann@example.com"))
        assert outcome == Found(
            document={
                "id": "c1",
                "owner": "u1",
                "firstName": "Ann",
                "lastName": None,
                "email": "ann@example.com",
                "phoneNumbers": None,
            }
        )

    def test_duplicate_id(self, db):
        store = ContactStore(db)
        store.insert(_document())
        assert store.insert(_document(first_name="Bob")) == Duplicate(contact_id="c1")

    def test_concurrent_insert_reported_as_duplicate(self, db, monkeypatch, caplog):
        store = ContactStore(db)
        store.insert(_document())
        db.expunge_all()
        # Make the existence check miss the row, as if another writer got there first.
        monkeypatch.setattr(db, "get", lambda *args, **kwargs: None)

        with caplog.at_level("WARNING", logger="app.services.contact_store"):
            outcome = store.insert(_document(first_name="Bob"))

        assert outcome == Duplicate(contact_id="c1")
        assert "inserted concurrently" in caplog.text
        monkeypatch.undo()
        assert store.find_one("c1").document["firstName"] == "Ann"


class TestFindOne:
    def test_missing(self, db):
        assert ContactStore(db).find_one("nope") == NotFound(contact_id="nope")

    def test_keeps_owner_in_stored_form(self, db):
        store = ContactStore(db)
        store.insert(_document(owner="u9"))
        outcome = store.find_one("c1")
        assert isinstance(outcome, Found)
        assert outcome.document["owner"] == "u9"


class TestUpdate:
    def test_missing_is_not_upserted(self, db):
        store = ContactStore(db)
        assert store.update("c1", _document()) == NotFound(contact_id="c1")
        assert store.find_one("c1") == NotFound(contact_id="c1")

    def test_full_replace(self, db):
        store = ContactStore(db)
        store.insert(_document(lastName="Lee", phoneNumbers={"home": "1"}))
        outcome = store.update("c1", _document(first_name="Anne"))
        assert outcome.document["firstName"] == "Anne"
        assert outcome.document["lastName"] is None
        assert outcome.document["phoneNumbers"] is None


class TestRemove:
    def test_returns_removed_document(self, db):
        store = ContactStore(db)
        store.insert(_document())
        outcome = store.remove("c1")
        assert isinstance(outcome, Found)
        assert outcome.document["id"] == "c1"
        assert store.find_one("c1") == NotFound(contact_id="c1")

    def test_missing(self, db):
        assert ContactStore(db).remove("c1") == NotFound(contact_id="c1")


class TestFind:
    def test_filters_by_owner_and_orders(self, db):
        store = ContactStore(db)
        store.insert(_document("c1", "u1", "Mia"))
        store.insert(_document("c2", "u1", "Ann"))
        store.insert(_document("c3", "u2", "Bob"))
        assert [d["id"] for d in store.find("u1")] == ["c2", "c1"]

    def test_query_exact_fields(self, db):
        store = ContactStore(db)
        store.insert(_document("c1", "u1", "Ann"))
        store.insert(_document("c2", "u1", "Bob", email="Ann"))
        store.insert(_document("c3", "u1", "Cat", lastName="Annie"))
        assert {d["id"] for d in store.find("u1", "Ann")} == {"c1", "c2"}
