"""Tests for page normalization and the count + slice round trip."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import event, select

from catalog.models.artist import Artist
from catalog.services.pagination import normalize_page, normalize_per_page, paginate, total_pages_for


class TestNormalizePage:
    @pytest.mark.parametrize("value", [None, "", "abc", "0", "-3", 0, -1, "1.5"])
    def test_falls_back_to_first_page(self, value) -> None:
        assert normalize_page(value) == 1

    @pytest.mark.parametrize("value, expected", [("2", 2), (3, 3), (" 7 ", 7)])
    def test_accepts_positive_numbers(self, value, expected) -> None:
        assert normalize_page(value) == expected


class TestNormalizePerPage:
    @pytest.mark.parametrize("value", [None, "", "0", 0, "-5", -5, "abc"])
    def test_falls_back_to_default(self, value) -> None:
        assert normalize_per_page(value) == 10

    def test_clamps_to_maximum(self) -> None:
        assert normalize_per_page("500") == 100
        assert normalize_per_page(100) == 100

    def test_accepts_values_in_range(self) -> None:
        assert normalize_per_page("25") == 25

    def test_custom_default_and_maximum(self) -> None:
        assert normalize_per_page(None, default=12, maximum=50) == 12
        assert normalize_per_page("80", default=12, maximum=50) == 50


@pytest.mark.parametrize(
    "total, per_page, expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (15, 10, 2), (101, 100, 2)],
)
def test_total_pages_for(total, per_page, expected) -> None:
    assert total_pages_for(total, per_page) == expected


class TestPaginate:
    @pytest.fixture
    async def fifteen_artists(self, make_artist):
        for index in range(1, 16):
            await make_artist(f"Artist {index:02d}")

    @pytest.fixture
    def statements(self, engine):
        seen = []

        def _record(conn, cursor, statement, parameters, context, executemany):
            seen.append(statement)

        event.listen(engine.sync_engine, "before_cursor_execute", _record)
        yield seen
        event.remove(engine.sync_engine, "before_cursor_execute", _record)

    def _stmt(self):
        return select(Artist).order_by(Artist.name)

    async def test_first_page(self, fifteen_artists, read_db) -> None:
        page = await paginate(read_db, self._stmt(), page=1, per_page=10)

        assert len(page.items) == 10
        assert page.items[0].name == "Artist 01"
        assert page.meta.model_dump() == {
            "current_page": 1,
            "total_pages": 2,
            "total_count": 15,
            "per_page": 10,
        }

    async def test_last_page_keeps_order(self, fifteen_artists, read_db) -> None:
        page = await paginate(read_db, self._stmt(), page=2, per_page=10)

        assert [artist.name for artist in page.items] == [f"Artist {index}" for index in range(11, 16)]
        assert page.meta.current_page == 2

    async def test_page_past_the_end_is_empty(self, fifteen_artists, read_db) -> None:
        page = await paginate(read_db, self._stmt(), page=3, per_page=10)

        assert page.items == []
        assert page.meta.total_count == 15
        assert page.meta.total_pages == 2
        assert page.meta.current_page == 3

    async def test_empty_set(self, read_db) -> None:
        page = await paginate(read_db, self._stmt(), page=1, per_page=10)

        assert page.items == []
        assert page.meta.total_pages == 0
        assert page.meta.total_count == 0
        assert page.meta.last_page == 1

    async def test_issues_count_and_fetch_only(self, fifteen_artists, read_db, statements) -> None:
        await paginate(read_db, self._stmt(), page=1, per_page=10)

        assert len(statements) == 2

    async def test_skips_fetch_past_the_end(self, fifteen_artists, read_db, statements) -> None:
        await paginate(read_db, self._stmt(), page=5, per_page=10)

        assert len(statements) == 1

    async def test_data_source_errors_propagate(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            await paginate(db, self._stmt(), page=1, per_page=10)

        assert db.execute.await_count == 1
