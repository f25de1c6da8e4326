"""
HTTP 接口

对局的创建、走子、悔棋、重开以及电脑应手
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from arcade.api.models import (
    AIInfoResponse,
    CreateGameRequest,
    GameKind,
    GameStateResponse,
    HistoryResponse,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from arcade.api.session_manager import SessionManager
from arcade.config import ArcadeConfig
from arcade.session import GameSession, SessionRegistry
from arcade.types import MoveOutcome
from xiangqi.ai import AIEngine
from xiangqi.ai.base import LEVEL_STRATEGIES

API_VERSION = "0.1.0"


def create_app(manager: SessionManager | None = None) -> FastAPI:
    """创建 FastAPI 应用"""
    manager = manager or SessionManager()
    app = FastAPI(
        title="Arcade API",
        description="Go and Xiangqi rule engines",
        version=API_VERSION,
    )

    # CORS 配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _get_session(game_id: str) -> GameSession:
        session = manager.get(game_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Game not found")
        return session

    # 路由
    @app.get("/")
    def root():
        """API 根路径"""
        return {"message": "Arcade API", "version": API_VERSION}

    @app.get("/health")
    def health():
        """健康检查"""
        return {"status": "healthy"}

    @app.get("/ai/info", response_model=AIInfoResponse)
    def get_ai_info():
        """获取 AI 信息"""
        return AIInfoResponse(
            available_strategies=AIEngine.list_strategies(),
            levels=AIEngine.list_levels(),
            level_strategies=LEVEL_STRATEGIES,
            games=SessionRegistry.list_games(),
        )

    @app.post("/games", response_model=GameStateResponse)
    def create_game(request: CreateGameRequest):
        """创建新游戏，电脑执红时立即走第一步"""
        config = ArcadeConfig(
            game=request.game.value,
            vs_ai=request.vs_ai,
            ai_level=request.ai_level.value,
            ai_color=request.ai_color,
            seed=request.seed,
            go_size=request.go_size,
        )
        session = manager.create(config)
        manager.play_ai(session.game_id)
        return _session_to_response(session)

    @app.get("/games")
    def list_games():
        """列出所有游戏"""
        return {"games": manager.list_games()}

    @app.get("/games/{game_id}", response_model=GameStateResponse)
    def get_game(game_id: str):
        """获取游戏状态"""
        return _session_to_response(_get_session(game_id))

    @app.delete("/games/{game_id}")
    def delete_game(game_id: str):
        """删除游戏"""
        if not manager.delete(game_id):
            raise HTTPException(status_code=404, detail="Game not found")
        return {"message": "Game deleted"}

    @app.post("/games/{game_id}/move", response_model=MoveResponse)
    def make_move(game_id: str, request: MoveRequest):
        """执行走棋，人机对战时电脑随后应着"""
        session = _get_session(game_id)

        if session.ai_to_move:
            return MoveResponse(success=False, error="It's AI's turn")

        outcome = session.apply_move(_request_coords(session, request))
        if not outcome.accepted:
            return _rejected(session, outcome)

        ai_notation, _ = manager.play_ai(game_id)
        return _accepted(session, outcome, ai_notation)

    @app.post("/games/{game_id}/pass", response_model=MoveResponse)
    def pass_turn(game_id: str):
        """停一手（仅围棋）"""
        session = _get_session(game_id)
        outcome = session.pass_turn()
        if not outcome.accepted:
            return _rejected(session, outcome)
        return _accepted(session, outcome)

    @app.post("/games/{game_id}/undo", response_model=MoveResponse)
    def undo(game_id: str):
        """悔一步"""
        session = _get_session(game_id)
        if not session.undo():
            return MoveResponse(
                success=False,
                game_state=_session_to_response(session),
                error="Nothing to undo",
            )
        return MoveResponse(success=True, game_state=_session_to_response(session))

    @app.post("/games/{game_id}/restart", response_model=GameStateResponse)
    def restart(game_id: str):
        """重新开始"""
        session = _get_session(game_id)
        session.restart()
        manager.play_ai(game_id)
        return _session_to_response(session)

    @app.get("/games/{game_id}/legal-moves", response_model=LegalMovesResponse)
    def legal_moves(game_id: str, x: int = Query(ge=0), y: int = Query(ge=0)):
        """某个坐标的合法目标（围棋为该点能否落子）"""
        session = _get_session(game_id)
        return LegalMovesResponse(x=x, y=y, targets=session.legal_moves_from((x, y)))

    @app.get("/games/{game_id}/history", response_model=HistoryResponse)
    def history(game_id: str):
        """走棋记录"""
        session = _get_session(game_id)
        return HistoryResponse(game_id=game_id, moves=session.get_move_history())

    @app.post("/games/{game_id}/ai-move", response_model=MoveResponse)
    def request_ai_move(game_id: str):
        """请求电脑走棋"""
        session = _get_session(game_id)

        if session.is_over:
            return MoveResponse(success=False, error="Game has ended")
        if not session.ai_to_move:
            return MoveResponse(success=False, error="Not AI's turn")

        ai_notation, outcome = manager.play_ai(game_id)
        if outcome is None:
            return MoveResponse(success=False, error="AI could not find a move")
        return _accepted(session, outcome, ai_notation)

    return app


def _request_coords(session: GameSession, request: MoveRequest):
    """把请求转换为会话使用的坐标"""
    if session.kind == GameKind.GO.value:
        if request.point is None:
            raise HTTPException(status_code=422, detail="Go moves need a point")
        return (request.point.x, request.point.y)

    if request.from_pos is None or request.to_pos is None:
        raise HTTPException(status_code=422, detail="Xiangqi moves need from and to")
    return (
        (request.from_pos.x, request.from_pos.y),
        (request.to_pos.x, request.to_pos.y),
    )


def _accepted(
    session: GameSession, outcome: MoveOutcome, ai_move: str | None = None
) -> MoveResponse:
    return MoveResponse(
        success=True,
        game_state=_session_to_response(session),
        notation=outcome.notation,
        captured_count=outcome.captured_count,
        ai_move=ai_move,
    )


def _rejected(session: GameSession, outcome: MoveOutcome) -> MoveResponse:
    return MoveResponse(
        success=False,
        game_state=_session_to_response(session),
        error=outcome.illegal.message,
        reason=outcome.reason.value,
    )


def _session_to_response(session: GameSession) -> GameStateResponse:
    """将会话转换为响应模型"""
    status = session.get_status().to_dict()
    frame = session.render_frame()
    return GameStateResponse(
        game_id=session.game_id,
        game=session.kind,
        width=frame.width,
        height=frame.height,
        cells=frame.cells,
        turn=status["turn"],
        status=status["status"],
        winner=status["winner"],
        reason=status["reason"],
        message=status["message"],
        move_count=status["move_count"],
        captures=status["captures"],
        in_check=status["in_check"],
        score=status["score"],
        last_move=status["last_move"],
        version=session.version,
    )


# 创建默认应用实例
app = create_app()
