"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from postctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from postctl.services.result import ServiceResult

_Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = _collect_items(result.data)
    if items:
        lines = [str(item.get("path") or item.get("category") or "") for item in items]
        return "\n".join(line for line in lines if line)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _collect_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    if isinstance(data.get("items"), list):
        return list(data["items"])
    items: list[dict[str, Any]] = []
    for year in data.get("years", []):
        items.extend(year.get("items", []))
    return items


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="post.ok")
    op = Text(f"  {result.op}", style="post.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="post.key")
    if key in ("path", "input_dir", "url"):
        v = Text(str(value), style="post.path")
    elif key == "title":
        v = Text(str(value), style="post.title")
    elif key == "date":
        v = Text(str(value), style="post.date")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _short_date(value: Any) -> str:
    if not value:
        return "—"
    return str(value)[:10]


def _post_table(items: list[dict[str, Any]]) -> Table:
    """Build a Rich Table for a list of post summaries."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Date", style="post.date", no_wrap=True)
    table.add_column("Title", style="post.title")
    table.add_column("Categories", style="post.category")
    table.add_column("Path", style="post.path")

    for item in items:
        table.add_row(
            _short_date(item.get("date")),
            Text(str(item.get("title", ""))),
            Text(", ".join(item.get("categories", []))),
            Text(str(item.get("path", ""))),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="post.error")
    op = Text(f"  {result.op}", style="post.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("input_dir", "site_title", "count", "category_count", "failure_count"):
        if d.get(key) not in (None, ""):
            _field(console, key, d[key])
    if d.get("newest"):
        _field(console, "newest", d["newest"])
        _field(console, "oldest", d["oldest"])

    failures = d.get("failures", [])
    if failures:
        table = Table(show_header=True, pad_edge=False, expand=False, title="Failures")
        table.add_column("Path", style="post.path")
        table.add_column("Code", style="post.warning")
        table.add_column("Message")
        for failure in failures:
            table.add_row(
                Text(str(failure.get("path", ""))),
                str(failure.get("code", "")),
                Text(str(failure.get("message", ""))),
            )
        console.print()
        console.print(table)


def _render_posts(result: ServiceResult, console: Console) -> None:
    d = result.data
    items = d.get("items", [])
    if d.get("category"):
        console.print(f"Category [post.category]{escape(d['category'])}[/post.category]")
    if items:
        console.print(_post_table(items))
    else:
        console.print("No posts.")

    footer = f"{d.get('count', len(items))} posts"
    if "page" in d:
        footer += f" — page {d['page']} of {d['total_pages']} ({d['total']} total)"
    console.print(f"\n{footer}")


def _render_categories(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Category", style="post.category")
    table.add_column("Posts", style="post.count", justify="right")
    for item in items:
        table.add_row(Text(str(item.get("category", ""))), str(item.get("count", 0)))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} categories")


def _render_archive(result: ServiceResult, console: Console) -> None:
    for year in result.data.get("years", []):
        console.print(f"\n[bold]{year['year']}[/bold] ({year['count']} posts)")
        for item in year.get("items", []):
            date = _short_date(item.get("date"))
            title = escape(str(item.get("title", "")))
            console.print(f"  [post.date]{date}[/post.date]  {title}")
    console.print(f"\n{result.data.get('count', 0)} posts")


def _render_show(result: ServiceResult, console: Console) -> None:
    d = result.data
    lines: list[str] = []
    for key in ("path", "date", "layout", "url", "slug"):
        val = d.get(key)
        if val:
            lines.append(f"{key}: {val}")
    if d.get("categories"):
        lines.append(f"categories: {', '.join(d['categories'])}")
    lines.append(f"comments: {'true' if d.get('comments') else 'false'}")

    content = "\n".join(lines)
    body = d.get("body", "")
    if body.strip():
        content += f"\n\n{body.strip()}"

    title = escape(str(d.get("title", "Untitled")))
    console.print(Panel(Text(content), title=title, expand=False))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, _Renderer] = {
    "build": _render_build,
    "posts": _render_posts,
    "categories": _render_categories,
    "archive": _render_archive,
    "show": _render_show,
}
