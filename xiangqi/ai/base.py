"""
电脑走棋的策略接口与引擎

策略通过 AIEngine.register 注册，难度等级映射到策略名
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from xiangqi.board import Board
from xiangqi.types import Color, Move

# medium 以上都使用单步启发式评分
LEVEL_STRATEGIES = {
    "easy": "random",
    "medium": "heuristic",
    "hard": "heuristic",
}


@dataclass
class AIConfig:
    """电脑棋手参数"""

    name: str = "AI"
    # None 表示每次结果不同
    seed: int | None = None
    # 评分抖动上限，0 时只在同分走法中随机
    jitter: float = 0.1


class AIStrategy(ABC):
    """走法选择策略

    子类设置 name 并实现 select_move
    """

    name: ClassVar[str] = "base"

    def __init__(self, config: AIConfig | None = None, rng: random.Random | None = None):
        self.config = config or AIConfig()
        self.rng = rng or random.Random(self.config.seed)

    @abstractmethod
    def select_move(self, board: Board, color: Color) -> Move | None:
        """为 color 挑一步合法走法

        Returns:
            走法；无子可走时为 None
        """


class AIEngine:
    """持有一个策略实例，并维护全局的策略注册表"""

    _strategies: ClassVar[dict[str, type[AIStrategy]]] = {}

    def __init__(self, strategy: AIStrategy | None = None):
        self.strategy = strategy

    @classmethod
    def register(cls, strategy_class: type[AIStrategy]) -> type[AIStrategy]:
        """类装饰器，按 name 登记策略"""
        cls._strategies[strategy_class.name] = strategy_class
        return strategy_class

    @classmethod
    def get_strategy(
        cls, name: str, config: AIConfig | None = None, rng: random.Random | None = None
    ) -> AIStrategy:
        try:
            strategy_class = cls._strategies[name]
        except KeyError:
            known = ", ".join(cls._strategies)
            raise ValueError(f"Unknown AI strategy: {name}. Available: {known}") from None
        return strategy_class(config, rng)

    @classmethod
    def for_level(
        cls, level: str, config: AIConfig | None = None, rng: random.Random | None = None
    ) -> "AIEngine":
        """按难度等级创建引擎"""
        if level not in LEVEL_STRATEGIES:
            known = ", ".join(LEVEL_STRATEGIES)
            raise ValueError(f"Unknown AI level: {level}. Available: {known}")
        return cls(cls.get_strategy(LEVEL_STRATEGIES[level], config, rng))

    @classmethod
    def list_strategies(cls) -> list[str]:
        return sorted(cls._strategies)

    @classmethod
    def list_levels(cls) -> list[str]:
        return list(LEVEL_STRATEGIES)

    def select_move(self, board: Board, color: Color) -> Move | None:
        if self.strategy is None:
            raise ValueError("No AI strategy set")
        return self.strategy.select_move(board, color)
