"""Tests for engine/report.py"""

from __future__ import annotations

import re
from datetime import date

import pytest

from engine.macro_regime import MacroInputs, analyze_macro_context
from engine.report import escape_md, render_alert, render_digest

from .conftest import make_report


def unescaped(text: str, char: str) -> int:
    """Count entity delimiters that Telegram legacy Markdown would parse."""
    return len(re.findall(r"(?<!\\)" + re.escape(char), text))


def assert_balanced(text: str) -> None:
    for char in ("_", "*", "`"):
        assert unescaped(text, char) % 2 == 0, f"unbalanced {char!r} in {text!r}"
    assert unescaped(text, "[") == 0


class TestEscape:
    def test_escapes_entity_characters(self):
        assert escape_md("STRONG_BUY") == "STRONG\\_BUY"
        assert escape_md("a*b`c[d") == "a\\*b\\`c\\[d"
        assert escape_md("BRK.B") == "BRK.B"


class TestRenderAlert:
    def test_actionable_report(self, strong_buy_report):
        text = render_alert(strong_buy_report)
        lines = text.splitlines()
        assert lines[0] == "*AAPL* | 🟢 STRONG\\_BUY | score +70"
        assert "Prix : 100.00" in lines[1]
        assert "Régime : TREND" in lines[1]
        assert lines[2].startswith("_Setup premium")
        assert lines[2].endswith("_")
        assert lines[3] == "LONG entrée 100.00 · stop 97.00 · objectif 109.00 (R/R 3)"

    @pytest.mark.parametrize("score", [100, 70, 40, 5, -40, -70, -100])
    def test_every_action_has_balanced_markdown(self, score):
        assert_balanced(render_alert(make_report("TSLA", score)))

    def test_special_characters_in_symbol(self):
        text = render_alert(make_report("BRK_B", 70))
        assert text.startswith("*BRK*\\_*B* | ")
        assert_balanced(text)

    def test_hold_has_no_plan_line(self):
        text = render_alert(make_report("MSFT", 5))
        assert "⚪ HOLD" in text
        assert "entrée" not in text

    def test_negative_score_sign(self):
        text = render_alert(make_report("TSLA", -40))
        assert "score -40" in text
        assert "SHORT entrée" in text


class TestRenderDigest:
    def test_counts_and_errors(self):
        batch = {
            "date": "2026-10-16T20:30:00+00:00",
            "reports": [make_report("AAPL", 70), make_report("MSFT", 30), make_report("TSLA", -65)],
            "errors": ["XXX: no 1d data returned for XXX"],
        }
        text = render_digest(batch)
        lines = text.splitlines()
        assert lines[0] == "*Analyse du 2026-10-16*"
        assert "🟢 STRONG\\_BUY 1" in lines[1]
        assert "⚪ HOLD 0" in lines[1]
        assert "🔴 STRONG\\_SELL 1" in lines[1]
        assert "- TSLA | 🔴 STRONG\\_SELL | -65" in lines
        assert lines[-1] == "⚠️ 1 symbole(s) en erreur"
        assert_balanced(text)

    def test_single_strong_report_is_balanced(self):
        batch = {"date": "2026-10-16", "reports": [make_report("AAPL", 70)], "errors": []}
        assert_balanced(render_digest(batch))

    def test_macro_line(self):
        inputs = MacroInputs(
            fed_dot_plot=3.75,
            market_pricing=3.2,
            ism_pmi=54.0,
            dxy_momentum=0.0,
            m2_growth=3.0,
            nfp_surprise=0.0,
        )
        batch = {
            "date": "2026-10-16",
            "reports": [],
            "errors": [],
            "macro": analyze_macro_context(inputs, today=date(2026, 6, 1)),
        }
        text = render_digest(batch)
        assert "Macro : RISK\\_ON / MID\\_CYCLE" in text
        assert_balanced(text)

    def test_empty_batch(self):
        text = render_digest({"date": "2026-10-16", "reports": [], "errors": []})
        assert "en erreur" not in text
        assert len(text.splitlines()) == 2
