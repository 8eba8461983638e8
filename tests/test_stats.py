from bibledb.etl.artifacts import compress_database
from bibledb.etl.loader import convert_json_to_sqlite
from bibledb.etl.stats import ConversionStats, collect_statistics, render_statistics
from conftest import make_book


def test_collect_statistics(tmp_path, write_json, json_dir):
    write_json("01.json", [make_book("Genesis", {1: ["a", "b"]}), make_book("Exodus", {1: ["c"]})])
    db_path = tmp_path / "bible.db"
    gz_path = tmp_path / "bible.db.gz"
    convert_json_to_sqlite(json_dir, db_path)
    compress_database(db_path, gz_path)
    before = db_path.read_bytes()

    stats = collect_statistics(json_dir, db_path, gz_path)

    assert (stats.books, stats.verses, stats.translations, stats.search_entries) == (2, 3, 1, 3)
    assert stats.json_size == (json_dir / "01.json").stat().st_size
    assert stats.db_size == db_path.stat().st_size
    assert stats.compressed_size == gz_path.stat().st_size
    assert db_path.read_bytes() == before


def test_render_statistics():
    stats = ConversionStats(
        books=66, verses=31102, translations=1, search_entries=31102,
        json_size=4000, db_size=2000, compressed_size=1000,
    )

    report = render_statistics(stats)

    assert "Books:           66" in report
    assert "Verses:          31,102" in report
    assert "Original JSON:   3.91 KB" in report
    assert "JSON -> SQLite:       50.0% reduction" in report
    assert "JSON -> Compressed:   75.0% reduction" in report
    assert "SQLite -> Compressed: 50.0% reduction" in report
