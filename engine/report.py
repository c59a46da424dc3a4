"""分析结果文本化渲染工具（Telegram Markdown）。"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any, Iterable, List, Mapping

from .actions import Action
from .analyzer import AnalysisReport

# legacy Markdown 的实体分隔符
_MD_SPECIAL = re.compile(r"([_*`\[])")


def escape_md(text: Any) -> str:
    """转义实体之外的 Markdown 特殊字符。"""
    return _MD_SPECIAL.sub(r"\\\1", str(text))


def _entity(text: Any, mark: str) -> str:
    """用 mark 包裹文本；实体内不能转义，遇到特殊字符先闭合再转义。"""
    parts: List[str] = []
    for segment in _MD_SPECIAL.split(str(text)):
        if not segment:
            continue
        if _MD_SPECIAL.fullmatch(segment):
            parts.append("\\" + segment)
        else:
            parts.append(f"{mark}{segment}{mark}")
    return "".join(parts)


def render_alert(report: AnalysisReport) -> str:
    """将单个标的的分析结果输出为一条告警消息。"""
    price = report.details.get("price")
    lines: List[str] = []
    lines.append(
        f"{_entity(report.symbol, '*')} | {escape_md(report.action.display)} | score {report.score:+d}"
    )
    if price is not None:
        lines.append(f"Prix : {price:.2f} | Régime : {escape_md(report.regime.value)}")
    lines.append(_entity(report.interpretation, "_"))

    plan = report.recommendation
    if plan.side != "NONE":
        lines.append(
            f"{plan.side} entrée {plan.entry:.2f} · stop {plan.stopLoss:.2f} · "
            f"objectif {plan.takeProfit:.2f} (R/R {plan.riskReward})"
        )
    return "\n".join(lines)


def render_digest(batch: Mapping[str, Any]) -> str:
    """根据批量分析结果输出汇总消息。"""
    reports: Iterable[AnalysisReport] = batch.get("reports", [])
    errors = batch.get("errors", [])
    reports = list(reports)

    counts = Counter(report.action for report in reports)
    lines: List[str] = []
    lines.append(_entity(f"Analyse du {str(batch.get('date', ''))[:10]}", "*"))
    lines.append(" · ".join(f"{escape_md(action.display)} {counts.get(action, 0)}" for action in Action))

    macro = batch.get("macro")
    if macro is not None:
        lines.append(f"Macro : {escape_md(macro.regime.phase)} / {escape_md(macro.regime.cycle_stage)}")

    for report in reports:
        lines.append(f"- {escape_md(report.symbol)} | {escape_md(report.action.display)} | {report.score:+d}")

    if errors:
        lines.append(f"⚠️ {len(errors)} symbole(s) en erreur")
    return "\n".join(lines)
