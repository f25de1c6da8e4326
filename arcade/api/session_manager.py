"""
会话管理器

在内存中管理多个对局实例
"""

from loguru import logger

from arcade.config import ArcadeConfig
from arcade.session import GameSession, create_session
from arcade.types import MoveOutcome


class SessionManager:
    """会话管理器"""

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}

    def create(self, config: ArcadeConfig) -> GameSession:
        """创建新对局"""
        session = create_session(config)
        self._sessions[session.game_id] = session
        logger.info(f"created {config.game} game {session.game_id[:8]} (vs_ai={config.vs_ai})")
        return session

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def play_ai(self, game_id: str) -> tuple[str | None, MoveOutcome | None]:
        """轮到电脑时走一步，返回 (走法记法, 结果)"""
        session = self._sessions.get(game_id)
        if session is None or not session.ai_to_move:
            return None, None
        move = session.choose_ai_move()
        if move is None:
            return None, None
        outcome = session.apply_ai_move(move)
        return move.to_notation(), outcome

    def delete(self, game_id: str) -> bool:
        """删除对局"""
        if game_id not in self._sessions:
            return False
        del self._sessions[game_id]
        return True

    def list_games(self) -> list[str]:
        """列出所有对局 ID"""
        return list(self._sessions.keys())
