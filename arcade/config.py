"""
全局配置

游戏选择、人机对战设置和日志级别
"""

import os
from dataclasses import dataclass, fields

ENV_PREFIX = "ARCADE_"


@dataclass
class ArcadeConfig:
    """会话配置"""

    game: str = "xiangqi"  # "go" | "xiangqi"
    vs_ai: bool = True
    ai_level: str = "medium"  # "easy" | "medium" | "hard"
    ai_color: str = "black"  # 电脑执哪一方（仅象棋）
    ai_delay_ms: int = 140  # 电脑“思考”延迟
    seed: int | None = None  # 随机种子（用于复现）
    jitter: float = 0.1  # 启发式评分抖动，0 为关闭
    go_size: int = 19
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ArcadeConfig":
        """从 ARCADE_* 环境变量读取配置，未设置的字段使用默认值"""
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            values[f.name] = _coerce(f.name, f.type, raw)
        return cls(**values)


def _coerce(name: str, type_: object, raw: str):
    type_name = type_ if isinstance(type_, str) else getattr(type_, "__name__", str(type_))
    if "bool" in type_name:
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if "int" in type_name:
        if raw.strip().lower() in ("", "none"):
            return None
        try:
            return int(raw)
        except ValueError:
            raise ValueError(
                f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}"
            ) from None
    if "float" in type_name:
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a number, got {raw!r}") from None
    return raw
