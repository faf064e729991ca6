"""Tests for the JSON-file Registration Store."""
import json
import re
import threading

import pytest

from services.registration_store import (
    DuplicateEmailError,
    MissingFieldsError,
    RegistrationStore,
    StoreConfig,
)


class TestInitialisation:
    def test_creates_empty_array_file(self, tmp_path):
        path = tmp_path / "nested" / "users.json"
        RegistrationStore(StoreConfig(path=path))
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_keeps_existing_file(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([
            {"id": 1, "name": "A", "email": "a@x.com", "phone": None, "created_at": "2025-01-01T00:00:00Z"}
        ]))
        store = RegistrationStore(StoreConfig(path=path))
        assert [r.email for r in store.read_all()] == ["a@x.com"]


class TestRegister:
    def test_success_appends_one_record(self, store):
        before = len(store.read_all())
        user_id = store.register("Sita", "sita@example.com", "9800000000")

        records = store.read_all()
        assert len(records) == before + 1
        record = records[-1]
        assert record.id == user_id
        assert record.name == "Sita"
        assert record.email == "sita@example.com"
        assert record.phone == "9800000000"
        assert record.registered_at

    def test_phone_is_optional(self, store):
        store.register("Sita", "sita@example.com")
        assert store.read_all()[0].phone is None

    @pytest.mark.parametrize("name, email", [
        (None, "a@x.com"),
        ("", "a@x.com"),
        ("A", None),
        ("A", ""),
    ])
    def test_missing_fields_rejected(self, store, name, email):
        with pytest.raises(MissingFieldsError) as info:
            store.register(name, email)
        assert str(info.value) == "Name and Email are required"
        assert store.read_all() == []

    def test_duplicate_email_rejected(self, store):
        store.register("A", "a@x.com")
        with pytest.raises(DuplicateEmailError) as info:
            store.register("B", "a@x.com")

        assert str(info.value) == "Email already registered"
        records = store.read_all()
        assert len(records) == 1
        assert records[0].name == "A"

    def test_sequential_writes_get_distinct_ids(self, store):
        ids = [store.register(f"Visitor {i}", f"v{i}@x.com") for i in range(25)]

        records = store.read_all()
        assert len(records) == 25
        assert len({r.id for r in records}) == 25
        assert ids == sorted(ids)

    def test_file_is_pretty_printed_with_original_keys(self, store):
        store.register("सीता", "sita@example.com", "9800000000")
        text = store.path.read_text(encoding="utf-8")

        assert "\n  {" in text
        assert "सीता" in text
        assert set(json.loads(text)[0]) == {"name", "email", "phone", "id", "created_at"}

    def test_unwritable_file_raises(self, tmp_path):
        # A directory where the file should be: reads come back empty, writes fail
        path = tmp_path / "users.json"
        path.mkdir()
        store = RegistrationStore(StoreConfig(path=path))
        with pytest.raises(OSError):
            store.register("A", "a@x.com")


class TestRecordFormat:
    def test_phone_key_left_out_when_not_given(self, store):
        store.register("Sita", "sita@example.com")
        saved = json.loads(store.path.read_text(encoding="utf-8"))[0]

        assert "phone" not in saved
        assert list(saved) == ["name", "email", "id", "created_at"]

    def test_created_at_has_millisecond_precision(self, store):
        store.register("Sita", "sita@example.com")
        saved = json.loads(store.path.read_text(encoding="utf-8"))[0]

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", saved["created_at"])

    def test_non_integer_ids_do_not_block_registration(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([
            {"id": "abc", "name": "A", "email": "a@x.com", "created_at": ""},
            {"id": 5, "name": "B", "email": "b@x.com", "created_at": ""},
        ]), encoding="utf-8")
        store = RegistrationStore(StoreConfig(path=path))

        user_id = store.register("C", "c@x.com")
        second_id = store.register("D", "d@x.com")

        assert isinstance(user_id, int)
        assert second_id > user_id
        assert [r.email for r in store.read_all()] == ["a@x.com", "b@x.com", "c@x.com", "d@x.com"]

class TestConcurrentRegistration:
    def test_same_email_registered_once(self, store):
        errors = []

        def attempt(i):
            try:
                store.register(f"Visitor {i}", "same@x.com")
            except DuplicateEmailError as e:
                errors.append(e)

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.read_all()) == 1
        assert len(errors) == 9

    def test_no_lost_updates(self, store):
        threads = [
            threading.Thread(target=store.register, args=(f"V{i}", f"v{i}@x.com"))
            for i in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.read_all()) == 10


class TestReadAll:
    @pytest.mark.parametrize("content", ["not json", "{\"a\": 1}", "[{\"name\": \"no id\"}]", ""])
    def test_invalid_content_reads_as_empty(self, tmp_path, content):
        path = tmp_path / "users.json"
        path.write_text(content, encoding="utf-8")
        store = RegistrationStore(StoreConfig(path=path))
        assert store.read_all() == []

    def test_deleted_file_reads_as_empty(self, store):
        store.path.unlink()
        assert store.read_all() == []

    def test_register_after_corruption_starts_fresh(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("garbage", encoding="utf-8")
        store = RegistrationStore(StoreConfig(path=path))

        store.register("A", "a@x.com")
        assert [r.email for r in store.read_all()] == ["a@x.com"]
