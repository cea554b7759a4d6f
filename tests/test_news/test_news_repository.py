from datetime import datetime, timedelta, timezone

import pytest

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestNewsRepository:
    def test_save_and_find(self, repository, make_item):
        saved = repository.save([make_item("g1", categories=["Politics"], author="Desk")])

        assert saved == 1
        item = repository.find_by_guid("g1")
        assert item.title == "Story g1"
        assert item.categories == ["Politics"]
        assert item.author == "Desk"
        assert item.published_at == BASE_TIME

    def test_save_empty_batch(self, repository):
        assert repository.save([]) == 0
        assert repository.count() == 0

    def test_upsert_is_idempotent(self, repository, make_item):
        batch = [make_item("g1"), make_item("g2")]

        repository.save(batch)
        repository.save(batch)

        assert repository.count() == 2

    def test_upsert_overwrites_fields(self, repository, make_item):
        repository.save([make_item("g1", title="Original", description="<p>old</p>")])

        repository.save([make_item("g1", title="Updated", description="<p>new</p>", image_url="https://i.example/x.jpg")])

        item = repository.find_by_guid("g1")
        assert repository.count() == 1
        assert item.title == "Updated"
        assert item.description == "<p>new</p>"
        assert item.image_url == "https://i.example/x.jpg"

    def test_duplicate_guid_within_batch_keeps_last(self, repository, make_item):
        saved = repository.save([make_item("g1", title="First"), make_item("g1", title="Second")])

        assert saved == 2
        assert repository.count() == 1
        assert repository.find_by_guid("g1").title == "Second"

    def test_item_without_guid_skipped(self, repository, make_item):
        saved = repository.save([make_item(""), make_item("g2")])

        assert saved == 1
        assert repository.count() == 1

    def test_find_by_source_newest_first_with_limit(self, repository, make_item):
        repository.save([
            make_item("old", published_at=BASE_TIME - timedelta(hours=2)),
            make_item("new", published_at=BASE_TIME),
            make_item("mid", published_at=BASE_TIME - timedelta(hours=1)),
            make_item("other", source_id="beta", language="kn", published_at=BASE_TIME + timedelta(hours=1)),
        ])

        items = repository.find_by_source("alpha", limit=2)

        assert [item.guid for item in items] == ["new", "mid"]

    def test_find_by_language_spans_sources(self, repository, make_item):
        repository.save([
            make_item("a1", source_id="alpha", published_at=BASE_TIME - timedelta(minutes=5)),
            make_item("g1", source_id="gamma", published_at=BASE_TIME),
            make_item("b1", source_id="beta", language="kn", published_at=BASE_TIME + timedelta(minutes=5)),
        ])

        items = repository.find_by_language("en", limit=10)

        assert [item.guid for item in items] == ["g1", "a1"]

    def test_returned_dates_are_utc(self, repository, make_item):
        repository.save([make_item("g1")])

        item = repository.find_by_source("alpha")[0]

        assert item.published_at.tzinfo is not None
        assert item.published_at.utcoffset() == timedelta(0)

    def test_unknown_guid(self, repository):
        assert repository.find_by_guid("missing") is None

    def test_count_by_source(self, repository, make_item):
        repository.save([
            make_item("a1"),
            make_item("a2"),
            make_item("b1", source_id="beta", language="kn"),
        ])

        assert repository.count_by_source() == {"alpha": 2, "beta": 1}

    @pytest.mark.parametrize("limit", [1, 3])
    def test_limit_respected(self, repository, make_item, limit):
        repository.save([make_item(f"g{i}", published_at=BASE_TIME + timedelta(minutes=i)) for i in range(5)])

        assert len(repository.find_by_source("alpha", limit=limit)) == limit
