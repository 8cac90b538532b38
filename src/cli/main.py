# =============================================================================
# src/cli/main.py - x-novel Command-Line Front End
# =============================================================================
#
# Talks to a running x-novel server from the terminal. Every subcommand
# builds one XNovelClient (src.main.build_client), performs a single
# operation and exits:
#
#   health                          Check the server is up
#   projects list|show|create       Browse and create novel projects
#   chapters list <project>         List a project's chapters
#   chat new|send|history           Drive the creative chat assistant
#   assist <action>                 Polish / continue / suggest on a passage
#   backup preview|export           Inspect or download a full data backup
#
# Typical usage:
#   python -m src.cli.main projects list
#   python -m src.cli.main chat send <conversation-id> "Who is the villain?"
#   cat draft.txt | python -m src.cli.main assist polish --style concise
#   python -m src.cli.main --json backup preview
#
# Streaming commands (chat send, assist) print the reply as it arrives.
# With --json the full result is printed once at the end instead, and all
# log output is redirected to stderr so stdout stays machine-readable.
# =============================================================================

"""Command-line front end for the x-novel API.

Usage::

    python -m src.cli.main health
    python -m src.cli.main projects create "The Salt Road" --genre fantasy
    python -m src.cli.main chat send <conversation-id> "Next scene?"
    python -m src.cli.main --json assist continue --file chapter3.txt

Exit status is 0 on success, 1 on any client or server error and 130
when interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import pydantic
from pydantic import BaseModel

from src.models.chat import ChatMode
from src.models.writing import PolishStyle, SuggestionAspect, WritingAction
from src.utils.errors import ValidationError, XNovelError


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _emit_json(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), ensure_ascii=False, indent=2))


def _format_project(project: Any) -> str:
    genre = ", ".join(project.genre) or "-"
    return (
        f"{project.id}  {project.title}\n"
        f"  status: {project.status.value}  genre: {genre}\n"
        f"  chapters: {project.completed_chapters}/{project.total_chapters}  "
        f"words: {project.total_words:,}"
    )


def _format_project_detail(project: Any) -> str:
    lines = [_format_project(project)]
    if project.topic:
        lines.append(f"  topic: {project.topic}")
    lines.append(f"  architecture: {'yes' if project.architecture_generated else 'no'}")
    lines.append(f"  blueprint: {'yes' if project.blueprint_generated else 'no'}")
    if project.global_summary:
        lines.append("")
        lines.append(project.global_summary)
    return "\n".join(lines)


def _format_chapter(chapter: Any) -> str:
    marker = "*" if chapter.is_finalized else " "
    title = chapter.title or "(untitled)"
    return f"{marker} {chapter.chapter_number:>3}  {title}  [{chapter.status.value}, {chapter.word_count:,} words]"


def _format_message(message: Any) -> str:
    return f"[{message.role.value}] {message.content}"


def _format_preview(preview: Any) -> str:
    return (
        f"projects:      {preview.projects}\n"
        f"chapters:      {preview.chapters}\n"
        f"total words:   {preview.total_words:,}\n"
        f"conversations: {preview.conversations}\n"
        f"messages:      {preview.messages}"
    )


def _print_delta(delta: str, _accumulated: str) -> None:
    sys.stdout.write(delta)
    sys.stdout.flush()


def _read_passage(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    return sys.stdin.read()


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _cmd_health(client: Any, args: argparse.Namespace) -> int:
    healthy = await client.health.check()
    if args.json_output:
        _emit_json({"healthy": healthy, "base_url": client.http.base_url})
    else:
        print(f"{client.http.base_url}: {'ok' if healthy else 'unhealthy'}")
    return 0 if healthy else 1


async def _cmd_projects(client: Any, args: argparse.Namespace) -> int:
    from src.models.project import CreateProjectRequest

    if args.action == "list":
        listing = await client.cached_projects(page=args.page, page_size=args.page_size)
        if args.json_output:
            _emit_json(listing)
            return 0
        if not listing.projects:
            print("No projects.")
        for project in listing.projects:
            print(_format_project(project))
        print(f"\n{len(listing.projects)} of {listing.total} projects", file=sys.stderr)
        return 0

    if args.action == "show":
        project = await client.cached_project(args.project_id)
        if project is None:
            print(f"Error: Project not found: {args.project_id}", file=sys.stderr)
            return 1
        if args.json_output:
            _emit_json(project)
        else:
            print(_format_project_detail(project))
        return 0

    try:
        request = CreateProjectRequest(
            title=args.title,
            topic=args.topic,
            genre=args.genre or None,
            chapter_count=args.chapter_count,
            words_per_chapter=args.words_per_chapter,
        )
    except pydantic.ValidationError as exc:
        raise ValidationError(message=f"invalid project: {exc}") from exc
    project = await client.cache.mutate(lambda: client.projects.create(request), invalidates=[("projects",)])
    if args.json_output:
        _emit_json(project)
    elif project is not None:
        print(f"Created project {project.id}: {project.title}")
    return 0


async def _cmd_chapters(client: Any, args: argparse.Namespace) -> int:
    listing = await client.cached_chapters(args.project_id)
    if args.json_output:
        _emit_json(listing)
        return 0
    if not listing.chapters:
        print("No chapters.")
    for chapter in listing.chapters:
        print(_format_chapter(chapter))
    return 0


async def _cmd_chat(client: Any, args: argparse.Namespace) -> int:
    session = client.chat_session()

    if args.action == "new":
        conv = await session.create(mode=args.mode, title=args.title, project_id=args.project_id)
        if args.json_output:
            _emit_json(conv)
        elif conv is not None:
            print(f"Created conversation {conv.id} ({conv.mode.value})")
        return 0

    if args.action == "history":
        messages = await session.messages(args.conversation_id)
        if args.json_output:
            _emit_json(messages)
            return 0
        for message in messages:
            print(_format_message(message))
        return 0

    result = await session.send(
        args.message,
        conversation_id=args.conversation_id,
        on_delta=None if args.json_output else _print_delta,
    )
    if args.json_output:
        _emit_json(
            {
                "result": result.result,
                "done": result.done,
                "aborted": result.aborted,
                "fell_back": result.fell_back,
            }
        )
    elif result.fell_back:
        # Nothing was streamed; print the one-shot reply.
        print(result.result)
    else:
        print()
    return 0


async def _cmd_assist(client: Any, args: argparse.Namespace) -> int:
    passage = _read_passage(args)
    assistant = client.writing_assistant()
    text = await assistant.execute(
        args.action,
        passage,
        project_id=args.project_id,
        style=args.style,
        target_words=args.target_words,
        aspect=args.aspect,
        on_delta=None if args.json_output else _print_delta,
    )
    if args.json_output:
        _emit_json({"action": args.action, "result": text})
        return 0
    outcome = assistant.last_outcome
    streamed = outcome.text if outcome is not None else ""
    if streamed:
        print()
    if text != streamed:
        # Fallback or a done-frame rewrite: the streamed deltas are not the answer.
        print(text)
    return 0


async def _cmd_backup(client: Any, args: argparse.Namespace) -> int:
    if args.action == "preview":
        preview = await client.backup.preview()
        if args.json_output:
            _emit_json(preview)
        else:
            print(_format_preview(preview))
        return 0

    data = await client.backup.export_data()
    if args.output:
        Path(args.output).write_bytes(data)
        print(f"Backup written to: {args.output} ({len(data):,} bytes)", file=sys.stderr)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()
    return 0


_HANDLERS = {
    "health": _cmd_health,
    "projects": _cmd_projects,
    "chapters": _cmd_chapters,
    "chat": _cmd_chat,
    "assist": _cmd_assist,
    "backup": _cmd_backup,
}


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


def _suppress_logs() -> None:
    """Send all structlog and stdlib logging to stderr at WARNING+.

    Must run before the client is built: structlog caches loggers on first
    use, so configuring afterwards would leave them on the old settings.
    """
    from src.utils.logging import configure_logging

    configure_logging(log_level="WARNING", stream=sys.stderr)


def _resolve_settings(args: argparse.Namespace) -> Any:
    """Settings from flags, then the environment, then ``config/config.yaml``."""
    # Deferred so --help stays fast.
    from src.config.loader import resolve_settings
    from src.config.settings import Settings

    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["api_base_url"] = args.base_url
    if args.no_fallback:
        overrides["stream_fallback_enabled"] = False
    return resolve_settings(settings=Settings(**overrides))


async def _run(args: argparse.Namespace, app_settings: Any) -> int:
    """Build a client, dispatch to the subcommand handler, and close it.

    Returns the process exit code.
    """
    from src.main import build_client

    try:
        async with build_client(app_settings) as client:
            return await _HANDLERS[args.command](client, args)
    except XNovelError as exc:
        print(f"\nError: {exc}", file=sys.stderr)
        return 1


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with one subparser per command group."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.main",
        description="Command-line client for an x-novel server.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print results as JSON (implies --quiet).",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output below WARNING and send it to stderr.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Server base URL (overrides XNOVEL_API_BASE_URL).",
    )
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not retry a failed stream as a one-shot request.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("health", help="Check that the server is reachable.")

    projects = commands.add_parser("projects", help="List, show, or create projects.")
    project_actions = projects.add_subparsers(dest="action", required=True)
    p_list = project_actions.add_parser("list", help="List projects.")
    p_list.add_argument("--page", type=int, default=1)
    p_list.add_argument("--page-size", type=int, default=20)
    p_show = project_actions.add_parser("show", help="Show one project.")
    p_show.add_argument("project_id")
    p_create = project_actions.add_parser("create", help="Create a project.")
    p_create.add_argument("title")
    p_create.add_argument("--topic", default=None)
    p_create.add_argument("--genre", action="append", default=[], help="Repeat for several genres.")
    p_create.add_argument("--chapters", dest="chapter_count", type=int, default=None)
    p_create.add_argument("--words-per-chapter", type=int, default=None)

    chapters = commands.add_parser("chapters", help="Work with a project's chapters.")
    chapter_actions = chapters.add_subparsers(dest="action", required=True)
    c_list = chapter_actions.add_parser("list", help="List chapters.")
    c_list.add_argument("project_id")

    chat = commands.add_parser("chat", help="Talk to the creative assistant.")
    chat_actions = chat.add_subparsers(dest="action", required=True)
    ch_new = chat_actions.add_parser("new", help="Start a conversation.")
    ch_new.add_argument("--mode", choices=[m.value for m in ChatMode], default=ChatMode.GENERAL.value)
    ch_new.add_argument("--title", default=None)
    ch_new.add_argument("--project", dest="project_id", default=None)
    ch_send = chat_actions.add_parser("send", help="Send a message and stream the reply.")
    ch_send.add_argument("conversation_id")
    ch_send.add_argument("message")
    ch_history = chat_actions.add_parser("history", help="Print a conversation's messages.")
    ch_history.add_argument("conversation_id")

    assist = commands.add_parser("assist", help="Run the writing assistant on a passage.")
    assist.add_argument("action", choices=[a.value for a in WritingAction])
    source = assist.add_mutually_exclusive_group()
    source.add_argument("--text", default=None, help="Passage text (default: read stdin).")
    source.add_argument("--file", default=None, help="Read the passage from a file.")
    assist.add_argument("--project", dest="project_id", default=None)
    assist.add_argument("--style", choices=[s.value for s in PolishStyle], default=None)
    assist.add_argument("--target-words", type=int, default=None)
    assist.add_argument("--aspect", choices=[a.value for a in SuggestionAspect], default=None)

    backup = commands.add_parser("backup", help="Preview or export a data backup.")
    backup_actions = backup.add_subparsers(dest="action", required=True)
    backup_actions.add_parser("preview", help="Show what a backup would contain.")
    b_export = backup_actions.add_parser("export", help="Download the backup file.")
    b_export.add_argument("--output", "-o", default=None, help="Write to a file instead of stdout.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse arguments, configure logging, run, exit."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        app_settings = _resolve_settings(args)
    except XNovelError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.quiet or args.json_output:
        _suppress_logs()
    else:
        from src.utils.logging import configure_logging

        configure_logging(
            log_level=app_settings.log_level,
            json_output=app_settings.app_env == "production",
            stream=sys.stderr,
        )

    try:
        exit_code = asyncio.run(_run(args, app_settings))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
