"""
Arcade CLI

- play: 终端对局（围棋或象棋）
- legal-count: 统计象棋局面的合法走法数
- suggest: 获取 AI 推荐走法
- serve: 启动 API 服务

## 使用示例

```bash
arcade play --game xiangqi --level medium
arcade play --game go --size 9 --no-ai
arcade legal-count
arcade suggest --fen "rheakaehr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RHEAKAEHR w" --json
```
"""

import asyncio
import json
import random

import typer
from rich.console import Console
from rich.text import Text

from arcade.config import ArcadeConfig
from arcade.controller import GameController
from arcade.logging import RUNTIME_LOGS_DIR, configure_logging
from arcade.ports import PointerEvent, command_for_key
from arcade.session import create_session
from arcade.types import RenderFrame
from xiangqi.ai import AIConfig, choose_move
from xiangqi.board import INITIAL_FEN, Board
from xiangqi.rules import legal_moves_for_color
from xiangqi.types import Color, Move

console = Console()
app = typer.Typer(help="Go and Xiangqi engines")

# 棋子颜色
CELL_STYLES = {
    "r": "bold red",
    "b": "bold blue",
    "B": "bold white on black",
    "W": "bold black on white",
}


class RichRenderer:
    """用 rich 在终端绘制画面"""

    def __init__(self, target: Console | None = None):
        self.console = target or console

    def render(self, frame: RenderFrame) -> None:
        text = Text()
        targets = set(frame.targets)
        # 象棋第 0 行是红方底线，显示在最下面
        order = range(frame.height - 1, -1, -1) if frame.game == "xiangqi" else range(frame.height)
        for y in order:
            text.append(f"{y:>2} ")
            for x in range(frame.width):
                text.append_text(_cell_text(frame, x, y, targets))
            text.append("\n")
        text.append("   " + "".join(f"{x:<3}" for x in range(frame.width)) + "\n")
        self.console.print(text)

        captures = "  ".join(f"{side}: {count}" for side, count in frame.captures.items())
        self.console.print(
            f"[bold]{frame.turn}[/bold] to move | moves: {frame.move_count} | captures {captures}"
        )
        if frame.message:
            self.console.print(f"[yellow]{frame.message}[/yellow]")


def _cell_text(frame: RenderFrame, x: int, y: int, targets: set) -> Text:
    code = frame.cells[y][x]
    if code is None:
        mark = "*" if (x, y) in targets else "."
        return Text(f"{mark:<3}", style="green" if mark == "*" else "dim")
    style = CELL_STYLES.get(code[0], "")
    if frame.selected == (x, y):
        style += " reverse"
    label = code[1] if frame.game == "xiangqi" else code
    return Text(f"{label:<3}", style=style)


def _parse_xy(parts: list[str]) -> tuple[int, int]:
    x, y = (int(p) for p in parts)
    return x, y


@app.command()
def play(
    game: str = typer.Option("xiangqi", "--game", "-g", help="棋类 (go/xiangqi)"),
    vs_ai: bool = typer.Option(True, "--ai/--no-ai", help="是否与电脑对战（仅象棋）"),
    level: str = typer.Option("medium", "--level", "-l", help="AI 难度 (easy/medium/hard)"),
    ai_color: str = typer.Option("black", "--ai-color", help="电脑执哪一方"),
    seed: int | None = typer.Option(None, "--seed", help="随机种子"),
    size: int = typer.Option(19, "--size", help="围棋棋盘大小"),
    log_level: str = typer.Option("WARNING", "--log-level", help="日志级别"),
) -> None:
    """终端对局

    输入坐标 "x y" 点击棋盘（象棋先选子再选目标，也可以直接输入 b3-e3），
    r 重开，u 悔棋，p 停一手，q 退出
    """
    configure_logging(log_level)
    config = ArcadeConfig(
        game=game,
        vs_ai=vs_ai,
        ai_level=level,
        ai_color=ai_color,
        seed=seed,
        go_size=size,
        log_level=log_level,
    )
    try:
        session = create_session(config)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from None

    controller = GameController(session, config, RichRenderer())
    controller.render()

    while True:
        if session.ai_to_move:
            asyncio.run(controller.run_ai_turn())
            continue

        line = typer.prompt(">", default="", show_default=False).strip()
        if line in ("q", "quit", "exit"):
            break
        if command_for_key(line) is not None:
            controller.key_down(line)
            continue

        try:
            if "-" in line and game == "xiangqi":
                move = Move.from_notation(line)
                session.apply_move(move)
                controller.render()
            else:
                point = _parse_xy(line.split())
                controller.pointer_down(PointerEvent(point))
        except ValueError:
            console.print("[red]Enter 'x y', a move like b3-e3, r/u/p or q[/red]")


@app.command("legal-count")
def legal_count(
    fen: str = typer.Option(INITIAL_FEN, "--fen", "-f", help="FEN 字符串"),
    color: str = typer.Option("red", "--color", "-c", help="走棋方 (red/black)"),
) -> None:
    """统计象棋局面的合法走法数"""
    try:
        board = Board.from_fen(fen)
        side = Color(color)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    print(len(legal_moves_for_color(board, side)))


@app.command()
def suggest(
    fen: str = typer.Option(..., "--fen", "-f", help="FEN 字符串（第二个字段 w/b 为走棋方）"),
    level: str = typer.Option("medium", "--level", "-l", help="AI 难度"),
    seed: int | None = typer.Option(None, "--seed", help="随机种子"),
    jitter: float = typer.Option(0.1, "--jitter", help="评分抖动，0 为关闭"),
    output_json: bool = typer.Option(False, "--json", help="JSON 输出"),
) -> None:
    """获取 AI 推荐走法"""
    try:
        board = Board.from_fen(fen)
        parts = fen.split()
        side = Color.BLACK if len(parts) > 1 and parts[1] == "b" else Color.RED
        move = choose_move(board, side, level, random.Random(seed), AIConfig(jitter=jitter))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    notation = move.to_notation() if move else None
    if output_json:
        print(json.dumps({"color": side.value, "level": level, "move": notation}))
    elif notation is None:
        print("No legal moves")
    else:
        print(notation)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="监听地址"),
    port: int = typer.Option(8000, "--port", "-p", help="端口"),
    log_level: str = typer.Option("INFO", "--log-level", help="日志级别"),
) -> None:
    """启动 API 服务"""
    import uvicorn

    from arcade.api import create_app

    configure_logging(log_level, RUNTIME_LOGS_DIR)
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    app()
