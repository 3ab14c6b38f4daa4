from decimal import Decimal

import pytest

from taxsheet import codec, config
from taxsheet.errors import InvalidUpload, MissingColumn, UnreadableFormat
from taxsheet.pipeline import accept_upload, build_upload_view, save
from taxsheet.store import SessionStore
from tests.conftest import make_xlsx


@pytest.fixture
def store():
    return SessionStore({})


def _upload(store, payload, file_name):
    accept_upload(store, payload, file_name)
    return build_upload_view(store.get(), file_name)


class TestUpload:
    """Upload path: decode -> derived column -> totals row -> render."""

    def test_scenario(self, store, sample_xlsx):
        view = _upload(store, sample_xlsx, "invoice.xlsx")

        assert len(view.surface.headers) == 9
        assert view.grid.get(2, 9) == Decimal("110")
        assert view.surface.rows[0][8].value == "110"
        assert view.total == Decimal("100")
        totals = view.grid.totals_row
        assert view.grid.get(totals, 7) == Decimal("100")
        assert view.grid.get(totals, 1) == "Total"
        assert view.surface.file_name == "invoice.xlsx"
        assert store.get() == sample_xlsx
        assert store.get_file_name() == "invoice.xlsx"

    @pytest.mark.parametrize("payload", [None, b""])
    def test_empty_payload(self, store, payload):
        with pytest.raises(InvalidUpload, match=config.FILE_NOT_SELECTED):
            accept_upload(store, payload, "x.xlsx")
        assert not store.has_upload()

    def test_new_upload_replaces_old(self, store, sample_xlsx, multi_xlsx):
        _upload(store, sample_xlsx, "one.xlsx")
        view = _upload(store, multi_xlsx, "two.xlsx")
        assert store.get() == multi_xlsx
        assert view.total == Decimal("112.5")

    def test_unreadable(self, store):
        with pytest.raises(UnreadableFormat):
            _upload(store, b"garbage", "x.xlsx")

    def test_too_narrow(self):
        with pytest.raises(MissingColumn):
            build_upload_view(make_xlsx([["a", "b"], [1, 2]]))


class TestSave:
    """Save path: canonical bytes + edits -> derived column -> encode."""

    def test_scenario(self, store, sample_xlsx):
        view = _upload(store, sample_xlsx, "invoice.xlsx")
        posted = view.surface.initial_values()
        posted["cell-2-1"] = "B"

        saved = save(store, posted)
        grid = codec.decode(saved.data)

        assert saved.file_name == "invoice.xlsx"
        assert saved.content_type == config.XLSX_MIME
        assert grid.get(2, 1) == "B"
        assert Decimal(str(grid.get(2, 9))) == Decimal("110")
        assert grid.width() == 9
        # The posted totals row points past the canonical grid, so nothing is duplicated
        assert grid.row_count() == 2

    def test_edits_feed_the_derived_column(self, store, sample_xlsx):
        _upload(store, sample_xlsx, "invoice.xlsx")
        saved = save(store, {"cell-2-7": "200", "cell-2-8": "oops"})
        assert saved.grid.get(2, 9) == Decimal("200")

    def test_repeated_saves_do_not_grow(self, store, sample_xlsx):
        view = _upload(store, sample_xlsx, "invoice.xlsx")
        posted = view.surface.initial_values()
        first = save(store, posted)
        second = save(store, posted)
        assert first.grid.values() == second.grid.values()
        assert second.grid.width() == 9

    def test_ignores_foreign_fields(self, store, sample_xlsx):
        _upload(store, sample_xlsx, "invoice.xlsx")
        saved = save(store, {"cell-9-9": "x", "cell-abc": "y", "submit": "Download"})
        assert [row[:8] for row in saved.grid.values()] == codec.decode(sample_xlsx).values()

    def test_posted_file_name_wins(self, store, sample_xlsx):
        _upload(store, sample_xlsx, "invoice.xlsx")
        assert save(store, {config.FILE_NAME_FIELD: "renamed.xlsx"}).file_name == "renamed.xlsx"

    def test_blank_file_name_falls_back(self, store, sample_xlsx):
        _upload(store, sample_xlsx, "invoice.xlsx")
        assert save(store, {config.FILE_NAME_FIELD: "  "}).file_name == "invoice.xlsx"
        store.put_file_name(None)
        assert save(store, {}).file_name == config.DEFAULT_DOWNLOAD_NAME

    def test_nothing_uploaded(self, store):
        with pytest.raises(InvalidUpload, match=config.NO_FILE_UPLOADED):
            save(store, {"cell-2-1": "B"})

    def test_saved_surface(self, store, sample_xlsx):
        _upload(store, sample_xlsx, "invoice.xlsx")
        surface = save(store, {"cell-2-1": "B"}).surface
        assert surface.rows[0][0].value == "B"
        assert not surface.rows[0][8].editable

    def test_pasted_text_is_saved_verbatim(self, store, sample_xlsx):
        _upload(store, sample_xlsx, "invoice.xlsx")
        saved = save(store, {"cell-2-1": '=HYPERLINK("http://x")', "cell-2-3": "A\x07B"})
        grid = codec.decode(saved.data)
        assert grid.get(2, 1) == '=HYPERLINK("http://x")'
        assert grid.get(2, 3) == "AB"
