#!/usr/bin/env python3
"""
Companion Guest CLI - ゲスト体験をターミナルから操作するCLI
Typer + Rich
"""

import asyncio
from datetime import timedelta

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .adapters.http.migration_client import HttpMigrationGateway
from .adapters.storage.file import FileKeyValueStorage
from .core.config import get_settings
from .core.exceptions import StorageError, ValidationError
from .core.logging import CompanionGuestLogger
from .domain.models.message import Sender
from .domain.models.session import GuestSession
from .domain.services.guest_session import GuestSessionManager
from .domain.services.replies import CannedReplyGenerator

app = typer.Typer(
    name="companion-guest",
    help="AIコンパニオン ゲスト体験CLI",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def build_manager(endpoint: str | None = None) -> GuestSessionManager:
    """設定からマネージャーを組み立てる"""
    settings = get_settings()
    CompanionGuestLogger.configure(settings.log_level)
    return GuestSessionManager(
        storage=FileKeyValueStorage(data_dir=settings.data_dir),
        migration_gateway=HttpMigrationGateway(
            endpoint_url=endpoint or settings.migration.endpoint_url,
            timeout=settings.migration.timeout,
        ),
        storage_key=settings.session.storage_key,
        session_ttl=timedelta(seconds=settings.session.ttl_seconds),
    )


def _require_session(manager: GuestSessionManager) -> GuestSession:
    session = manager.get_current_session()
    if session is None:
        console.print("[red]体験セッションがありません。'start' で開始してください[/red]")
        raise typer.Exit(1)
    return session


@app.command()
def start():
    """
    新しい体験セッションを開始します（既存のセッションは破棄されます）
    """
    manager = build_manager()
    try:
        session = manager.create_session()
    except StorageError as e:
        console.print(f"[red]セッションを保存できません: {e.message}[/red]")
        raise typer.Exit(1)

    companion = session.temporary_companion
    console.print(Panel(
        f"[bold]{companion.name}[/bold] ({companion.personality.value})\n"
        f"{companion.backstory}\n"
        f"[magenta]{' / '.join(companion.traits)}[/magenta]\n\n"
        f"{session.conversation_history[0].content}",
        title=f"セッション {session.session_id}",
        border_style="magenta",
    ))


@app.command()
def say(text: str = typer.Argument(..., help="送信するメッセージ")):
    """
    コンパニオンにメッセージを送ります
    """
    manager = build_manager()
    try:
        session = manager.add_message(text.strip(), Sender.USER)
    except ValidationError:
        console.print("[red]エラー: メッセージが空です[/red]")
        raise typer.Exit(1)

    if session is None:
        console.print("[red]体験セッションがありません。'start' で開始してください[/red]")
        raise typer.Exit(1)

    reply = CannedReplyGenerator().generate(session.temporary_companion)
    session = manager.add_message(reply, Sender.COMPANION) or session
    console.print(f"[bold magenta]{session.temporary_companion.name}[/bold magenta]: {reply}")

    prompt = manager.get_next_conversion_prompt(session)
    if prompt:
        console.print(Panel(prompt, title="创建专属伴侣", border_style="green"))


@app.command()
def show():
    """
    会話履歴を表示します
    """
    manager = build_manager()
    session = _require_session(manager)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("時刻", style="cyan")
    table.add_column("送信者", style="yellow")
    table.add_column("内容", style="white")

    for message in session.conversation_history:
        sender = "あなた" if message.is_user else session.temporary_companion.name
        table.add_row(message.timestamp.strftime("%H:%M:%S"), sender, message.content)

    console.print(table)


@app.command()
def stats():
    """
    セッション統計を表示します
    """
    manager = build_manager()
    session = _require_session(manager)
    session_stats = manager.get_session_stats(session)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("項目", style="cyan")
    table.add_column("値", justify="right", style="yellow")
    table.add_row("コンパニオン", session_stats.companion_name)
    table.add_row("経過秒数", str(session_stats.time_spent))
    table.add_row("発言数", str(session_stats.message_count))
    table.add_row("エンゲージメント", f"{session_stats.engagement_score}%")
    table.add_row("会話の長さ", str(session_stats.conversation_length))
    console.print(table)

    for trigger in session.conversion_triggers:
        mark = "✅" if trigger.triggered else "⏳"
        console.print(f"{mark} {trigger.type.value} (>= {trigger.threshold:g})")


@app.command()
def clear():
    """
    体験セッションを削除します
    """
    build_manager().clear_session()
    console.print("[green]体験セッションを削除しました[/green]")


@app.command()
def migrate(
    user_id: str = typer.Argument(..., help="移行先のアカウントID"),
    endpoint: str | None = typer.Option(None, help="移行APIのURL（省略時は設定値）"),
):
    """
    体験セッションを正式アカウントへ移行します
    """
    manager = build_manager(endpoint)
    if asyncio.run(manager.migrate_to_account(user_id)):
        console.print(f"[bold green]✅ アカウント {user_id} へ移行しました[/bold green]")
    else:
        console.print(Panel(
            "[red]❌ 移行できませんでした[/red]\n"
            "体験セッションは残っています。もう一度お試しください",
            title="移行エラー",
            border_style="red",
        ))
        raise typer.Exit(1)


@app.command()
def server(
    host: str | None = typer.Option(None, help="サーバーのホストアドレス"),
    port: int | None = typer.Option(None, help="サーバーのポート番号"),
    reload: bool = typer.Option(False, help="開発モードでの自動リロード"),
):
    """
    移行API サーバーを起動します
    """
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    console.print(Panel(
        f"[bold blue]Companion Guest API[/bold blue]\n"
        f"🚀 起動中: http://{host}:{port}\n"
        f"📚 ドキュメント: http://{host}:{port}/docs",
        title="サーバー起動",
    ))
    uvicorn.run("companion_guest.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
