"""手动触发一次自选股分析与告警推送的脚本。"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# 确保项目根目录在 Python 模块搜索路径中
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from infra.settings import Settings, configure_logging  # noqa: E402
from scheduler import run_scheduled_analysis  # noqa: E402


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings)
    asyncio.run(run_scheduled_analysis(settings))


if __name__ == "__main__":
    main()
