"""Tests for datahub/watchlist.py"""

from __future__ import annotations

import json

from datahub.watchlist import Watchlist, load_watchlist, normalize_symbol, save_watchlist


class TestWatchlist:
    def test_normalize_symbol(self):
        assert normalize_symbol("  aapl ") == "AAPL"
        assert normalize_symbol("") == ""

    def test_add_is_idempotent(self):
        watchlist = Watchlist()
        watchlist.add("aapl")
        watchlist.add("AAPL ")
        assert watchlist.symbols == ["AAPL"]

    def test_add_ignores_blank(self):
        watchlist = Watchlist()
        watchlist.add("   ")
        assert watchlist.symbols == []

    def test_disable_and_re_add(self):
        watchlist = Watchlist()
        watchlist.extend(["AAPL", "MSFT"])
        assert watchlist.set_enabled("msft", False)
        assert watchlist.enabled_symbols == ["AAPL"]
        watchlist.add("MSFT")
        assert watchlist.enabled_symbols == ["AAPL", "MSFT"]

    def test_remove(self):
        watchlist = Watchlist()
        watchlist.add("AAPL")
        assert watchlist.remove("aapl") is True
        assert watchlist.remove("AAPL") is False
        assert watchlist.set_enabled("AAPL", True) is False


class TestPersistence:
    def test_missing_file_is_empty(self, tmp_path):
        watchlist = load_watchlist(tmp_path / "absent.json")
        assert watchlist.entries == []

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "watchlist.json"
        watchlist = Watchlist()
        watchlist.extend(["AAPL", "MC.PA"])
        watchlist.set_enabled("MC.PA", False)
        save_watchlist(watchlist, path)

        loaded = load_watchlist(path)
        assert loaded.symbols == ["AAPL", "MC.PA"]
        assert loaded.enabled_symbols == ["AAPL"]
        assert loaded.entries[0].added_at == watchlist.entries[0].added_at

    def test_reads_legacy_entries(self, tmp_path):
        path = tmp_path / "watchlist.json"
        path.write_text(json.dumps({"entries": [{"symbol": "tsla"}]}), encoding="utf-8")
        loaded = load_watchlist(path)
        assert loaded.symbols == ["TSLA"]
        assert loaded.entries[0].enabled is True
