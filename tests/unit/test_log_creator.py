"""Tests for simulated log generation."""

import pytest

from logstats.core.creator import LogfileCreator
from logstats.core.reader import LogfileReader
from logstats.rollups.analyzer import LogAnalyzer


class TestLogfileCreator:
    """Test random record and file generation."""

    def test_entries_are_valid(self):
        creator = LogfileCreator(seed=42)

        for record in creator.create_entries(200):
            assert 2015 <= record.year <= 2016
            assert 1 <= record.month <= 12
            assert 1 <= record.day <= 28
            assert 0 <= record.hour <= 23
            assert 0 <= record.minute <= 59

    def test_entries_sorted(self):
        entries = LogfileCreator(seed=1).create_entries(50)

        assert entries == sorted(entries)

    def test_seed_is_reproducible(self):
        assert LogfileCreator(seed=7).create_entries(20) == LogfileCreator(seed=7).create_entries(20)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            LogfileCreator().create_entries(-1)

    def test_create_file_feeds_analyzer(self, tmp_path):
        path = LogfileCreator(seed=3).create_file(tmp_path / "logs" / "demo.log", 120)

        with LogfileReader(path) as reader:
            analyzer = LogAnalyzer(reader)
            stats = analyzer.analyze_all()

        assert analyzer.number_of_accesses() == 120
        assert sum(analyzer.day_counts) == 120
        assert analyzer.total_accesses_per_month() == 120
        assert analyzer.average_accesses_per_month() == 10
        assert all(s.skipped == 0 for s in stats)
