from typing import Optional

from rich.filesize import decimal
from rich.markup import escape

from .graph import PackageGraph
from .models import PackageRecord, Reason


def format_size(size: int) -> str:
    return decimal(size)


def format_package_details(
    record: Optional[PackageRecord],
    graph: Optional[PackageGraph] = None,
) -> str:
    if record is None:
        return "[dim italic]No package selected.[/]"

    content_parts = []
    reason_style = "[b $success]" if record.reason is Reason.EXPLICIT else "[b $warning]"

    content_parts.append(
        f"[b $primary]{escape(record.name)}[/] - [dim $secondary]{escape(record.version)}[/]\n"
        f"[italic $text-subtle]{escape(record.description) or 'No description available.'}[/]\n\n"
    )
    content_parts.append(
        f"[b $accent]Reason:[/] {reason_style}{record.reason.value}[/]\n"
        f"[b $accent]Size:[/] [$text]{format_size(record.installed_size)}[/]\n"
    )
    url_display = (
        f"[$link]{escape(record.url)}[/$link]" if record.url else "[dim]_Not specified_[/dim]"
    )
    content_parts.append(f"[b $accent]Homepage:[/] {url_display}\n")

    if graph is not None and record.name in graph:
        content_parts.append(
            f"[b $accent]Required by:[/] [$text]{len(graph.dependent_names_of(record.name))}[/]  "
            f"[b $accent]Depends on:[/] [$text]{len(graph.dependency_names_of(record.name))}[/]\n"
        )
        missing = graph.dangling.get(record.name)
        if missing:
            content_parts.append(
                f"[b $accent]Not installed:[/] [$text-muted]{escape(', '.join(sorted(missing)))}[/]\n"
            )

    if record.provides:
        content_parts.append(
            f"[b $accent]Provides:[/] [$text-muted]{escape(', '.join(sorted(record.provides)))}[/]\n"
        )

    if record.optional_dependencies:
        content_parts.append("\n[b $text]Optional Dependencies[/]\n")
        for dep in record.optional_dependencies:
            line = f"  [dim]-[/dim] [$secondary]{escape(dep.name)}[/$secondary]"
            if dep.description:
                line += f" [dim]{escape(dep.description)}[/dim]"
            content_parts.append(line + "\n")

    return "".join(content_parts)
