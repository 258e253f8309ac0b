"""Tests for bracket tables and tariff book loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from vehicletax.core.types import Region, TaxBurden
from vehicletax.taxation.brackets import BracketTable, TaxBracket
from vehicletax.taxation.tariffs import load_tariff_book


_DEFAULT_TARIFFS = Path(__file__).resolve().parents[1] / "config" / "tariffs.yml"


@pytest.fixture
def raw_tariffs():
    with open(_DEFAULT_TARIFFS) as fh:
        return yaml.safe_load(fh)


def _write(tmp_path, raw) -> Path:
    path = tmp_path / "tariffs.yml"
    with open(path, "w") as fh:
        yaml.dump(raw, fh)
    return path


class TestBracketTable:
    def test_first_matching_bound_wins(self):
        table = BracketTable.from_rows(
            "t",
            [
                {"upper_bound": 10, "value": 1},
                {"upper_bound": 20, "value": 2},
                {"upper_bound": None, "value": 3},
            ],
        )
        assert table.lookup(0) == 1
        assert table.lookup(10) == 1
        assert table.lookup(10.01) == 2
        assert table.lookup(20) == 2
        assert table.lookup(1_000_000) == 3

    def test_bounded_table_raises_above_ceiling(self):
        table = BracketTable.from_rows("bounded", [{"upper_bound": 5, "value": 1}])
        assert not table.open_ended
        assert table.ceiling == 5
        with pytest.raises(ValueError, match="above the last bracket"):
            table.lookup(6)

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError, match="is empty"):
            BracketTable(name="empty", rows=())

    def test_decreasing_bounds_rejected(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            BracketTable.from_rows(
                "bad", [{"upper_bound": 10, "value": 1}, {"upper_bound": 10, "value": 2}]
            )

    def test_open_row_must_be_last(self):
        with pytest.raises(ValueError, match="only the last row"):
            BracketTable.from_rows(
                "bad", [{"upper_bound": None, "value": 1}, {"upper_bound": 10, "value": 2}]
            )

    def test_bracket_accepts_field_name(self):
        row = TaxBracket(upper_bound_inclusive=70, value=61.5)
        assert row.upper_bound_inclusive == 70


class TestDefaultTariffBook:
    def test_region_and_year(self, tariffs):
        assert tariffs.region == Region.WALLONIA_BRUSSELS
        assert tariffs.year == 2025

    def test_registration_table_verbatim(self, tariffs):
        rows = [(r.upper_bound_inclusive, r.value) for r in tariffs.registration_base.rows]
        assert rows == [
            (70, 61.5),
            (85, 123.0),
            (100, 495.0),
            (110, 867.0),
            (120, 1239.0),
            (155, 2478.0),
            (None, 4957.0),
        ]

    def test_degressivity_schedule(self, tariffs):
        schedule = tariffs.degressivity
        assert [s.retained_percentage for s in schedule.steps] == [
            100, 90, 80, 70, 60, 55, 50, 45, 40, 35, 30, 25, 20, 15, 10,
        ]
        assert schedule.last_age == 15
        assert schedule.forfeit_floor == 61.5
        assert schedule.retained_percentage(0) == 100
        assert schedule.retained_percentage(15) == 10
        assert schedule.retained_percentage(16) is None

    def test_eco_malus_has_eleven_paying_bands(self, tariffs):
        paying = [r for r in tariffs.eco_malus.bands.rows if r.value > 0]
        assert len(paying) == 11
        assert tariffs.eco_malus.collector_age == 30

    def test_circulation_ends_at_twenty(self, tariffs):
        assert tariffs.circulation.bands.ceiling == 20
        assert tariffs.circulation.per_cv == 150

    def test_tables_cover_whole_input_range(self, tariffs):
        for key in range(0, 400):
            tariffs.registration_base.lookup(key)
            tariffs.eco_malus.bands.lookup(key)
        for key in range(0, 21):
            tariffs.circulation.bands.lookup(key)

    @pytest.mark.parametrize(
        "total,expected",
        [
            (0, TaxBurden.LOW),
            (1000, TaxBurden.LOW),
            (1000.01, TaxBurden.MODERATE),
            (2000, TaxBurden.MODERATE),
            (2000.01, TaxBurden.HIGH),
        ],
    )
    def test_burden_classification(self, tariffs, total, expected):
        assert tariffs.burden.classify(total) == expected


class TestTariffLoadingErrors:
    def test_custom_path(self, tmp_path, raw_tariffs):
        raw_tariffs["year"] = 2026
        book = load_tariff_book(_write(tmp_path, raw_tariffs))
        assert book.year == 2026

    def test_missing_section(self, tmp_path, raw_tariffs):
        del raw_tariffs["eco_malus"]
        with pytest.raises(ValueError, match="missing required section 'eco_malus'"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_registration_table_must_be_open_ended(self, tmp_path, raw_tariffs):
        raw_tariffs["registration_base"] = raw_tariffs["registration_base"][:-1]
        with pytest.raises(ValueError, match="must end on an open-ended row"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_circulation_table_must_be_bounded(self, tmp_path, raw_tariffs):
        raw_tariffs["circulation"]["bands"].append({"upper_bound": None, "value": 2500})
        with pytest.raises(ValueError, match="must end on a bounded band"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_unordered_eco_malus_bands(self, tmp_path, raw_tariffs):
        bands = raw_tariffs["eco_malus"]["bands"]
        bands[1], bands[2] = bands[2], bands[1]
        with pytest.raises(ValueError, match="strictly increasing"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_unordered_degressivity_steps(self, tmp_path, raw_tariffs):
        steps = raw_tariffs["degressivity"]["steps"]
        steps[0], steps[1] = steps[1], steps[0]
        with pytest.raises(ValueError, match="increasing max_age"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        with pytest.raises(ValueError, match="missing required section"):
            load_tariff_book(path)

    def test_top_level_list_rejected(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- region: wallonia_brussels\n- year: 2025\n")
        with pytest.raises(ValueError, match="must be a mapping of sections, got list"):
            load_tariff_book(path)

    def test_null_section_rejected(self, tmp_path, raw_tariffs):
        raw_tariffs["eco_malus"] = None
        with pytest.raises(ValueError, match="section 'eco_malus' must be a mapping"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_null_bracket_list_rejected(self, tmp_path, raw_tariffs):
        raw_tariffs["registration_base"] = None
        with pytest.raises(ValueError, match="section 'registration_base' must be a list"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_missing_co2_exemption_threshold(self, tmp_path, raw_tariffs):
        del raw_tariffs["eco_malus"]["exempt_below"]
        with pytest.raises(ValueError, match="missing required section 'exempt_below'"):
            load_tariff_book(_write(tmp_path, raw_tariffs))

    def test_forfeit_waiver_defaults_to_on(self, tmp_path, raw_tariffs):
        del raw_tariffs["eco_malus"]["waived_at_forfeit_floor"]
        book = load_tariff_book(_write(tmp_path, raw_tariffs))
        assert book.eco_malus.waived_at_forfeit_floor is True
