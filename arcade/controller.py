"""
对局控制器

把输入事件转换为会话命令，并调度电脑走棋。
电脑走棋前记录会话版本号，等待结束后版本变化则丢弃结果。
"""

import asyncio
from dataclasses import replace

from loguru import logger

from arcade.config import ArcadeConfig
from arcade.ports import Command, NullRenderer, PointerEvent, RenderPort, command_for_key
from arcade.session import Coords, GameSession
from arcade.types import MoveOutcome


class GameController:
    """对局控制器"""

    def __init__(
        self,
        session: GameSession,
        config: ArcadeConfig | None = None,
        renderer: RenderPort | None = None,
    ):
        self.session = session
        self.config = config or ArcadeConfig()
        self.renderer = renderer or NullRenderer()
        # 象棋选中的棋子和它的合法目标
        self.selected: Coords | None = None
        self.targets: list[Coords] = []

    # ------------------------------------------------------------------
    # 输入
    # ------------------------------------------------------------------

    def pointer_down(self, event: PointerEvent) -> MoveOutcome | None:
        """点击棋盘

        围棋直接落子；象棋先选中己方棋子，再点击高亮目标走棋
        """
        if not event.is_primary or self.session.is_over or self.session.ai_to_move:
            return None

        point = tuple(event.point)
        if self.session.kind == "go":
            outcome = self.session.apply_move(point)
            self.render()
            return outcome

        outcome = None
        if self.selected is not None and point in self.targets:
            outcome = self.session.apply_move((self.selected, point))
            self._clear_selection()
        else:
            targets = self.session.legal_moves_from(point)
            if targets:
                self.selected = point
                self.targets = targets
            else:
                self._clear_selection()
        self.render()
        return outcome

    def key_down(self, key: str) -> MoveOutcome | bool | None:
        """按键：r 重开，u 悔棋，p 停一手"""
        cmd = command_for_key(key)
        if cmd is None:
            return None
        return self.command(cmd)

    def command(self, cmd: Command) -> MoveOutcome | bool | None:
        """执行命令并重新渲染"""
        self._clear_selection()
        result: MoveOutcome | bool | None
        if cmd == Command.RESTART:
            self.session.restart()
            result = None
        elif cmd == Command.UNDO:
            result = self.session.undo()
        else:
            result = self.session.pass_turn()
        logger.debug(f"command {cmd.value} -> {result}")
        self.render()
        return result

    # ------------------------------------------------------------------
    # 电脑走棋
    # ------------------------------------------------------------------

    async def run_ai_turn(self) -> MoveOutcome | None:
        """轮到电脑时计算并执行一步，结果过期或没有走法时返回 None"""
        if not self.session.ai_to_move:
            return None

        version = self.session.version
        await asyncio.sleep(self.config.ai_delay_ms / 1000)
        move = self.session.choose_ai_move(self.config.ai_level)

        if self.session.version != version:
            logger.debug(
                f"discarding stale AI move (version {version} -> {self.session.version})"
            )
            return None
        if move is None:
            return None

        outcome = self.session.apply_ai_move(move)
        self._clear_selection()
        self.render()
        return outcome

    # ------------------------------------------------------------------
    # 渲染
    # ------------------------------------------------------------------

    def frame(self):
        """当前画面，附带选中状态"""
        return replace(
            self.session.render_frame(), selected=self.selected, targets=list(self.targets)
        )

    def render(self) -> None:
        self.renderer.render(self.frame())

    def _clear_selection(self) -> None:
        self.selected = None
        self.targets = []
