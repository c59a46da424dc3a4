"""从项目根目录的 .env 文件加载环境变量。"""

from __future__ import annotations

from dotenv import load_dotenv

# 加载默认 .env（位于项目根目录）
load_dotenv()
