# SPDX-License-Identifier: Apache-2.0
import pytest

from treatyglobe.transform.treaties import (
    TreatyRecord,
    TreatyTableError,
    read_treaties,
    resolve_columns,
)


def test_reads_korean_export_and_skips_rows_without_country(treaty_csv):
    records = read_treaties(treaty_csv)
    assert [r.country for r in records] == ["France", "Japan", "Atlantis", "Brazil"]
    first = records[0]
    assert first.field == "경제"
    assert first.title == "한-프랑스 투자보장협정"
    assert first.signed == "2020-01-02"
    assert first.effective == "2020-06-01"


def test_tab_separated_english_headers_keep_extra_columns(tmp_path):
    path = tmp_path / "treaties.tsv"
    path.write_text(
        "Country\tTitle\tEffective\tNote\n Kenya \tAir Services\t2015-01-01\tratified\n",
        encoding="utf-8",
    )
    (record,) = read_treaties(path)
    assert record == TreatyRecord(
        country="Kenya", title="Air Services", effective="2015-01-01"
    )
    assert record.extra == {"Note": "ratified"}


def test_byte_order_mark_is_ignored(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_text("체결대상국가,조약명\nJapan,협정\n", encoding="utf-8-sig")
    (record,) = read_treaties(path, delimiter=",")
    assert record.country == "Japan"


def test_missing_country_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("name,title\nx,y\n", encoding="utf-8")
    with pytest.raises(TreatyTableError):
        read_treaties(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_treaties(tmp_path / "absent.csv")


def test_resolve_columns_prefers_first_alias():
    columns = resolve_columns(["country", "체결대상국가", "분야"])
    assert columns["country"] == "체결대상국가"
    assert columns["field"] == "분야"


def test_record_accepts_field_keyword_and_defaults_extra():
    import treatyglobe.transform as transform

    record = transform.TreatyRecord("X", field="f")
    assert record.field == "f"
    assert record.extra == {}
    assert record == transform.TreatyRecord("X", field="f", extra={"note": "n"})
