"""Markdown formatter for weekly-report."""

from __future__ import annotations

from typing import List, Mapping
from urllib.parse import quote

from weekly_report.config import AreaSection, ReportConfig
from weekly_report.report_data import (
    CategorizedItems,
    ClassifiedItem,
    Contributor,
    ReportingWindow,
)

OTHER_SECTION_TITLE = "\U0001F4CB Other"

# Characters left alone by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def report_title(window: ReportingWindow) -> str:
    """Title used for the report heading and the published discussion."""
    return (
        f"Weekly Status Report: {window.start_formatted} - {window.end_formatted}"
    )


def format_markdown(
    window: ReportingWindow,
    categorized: CategorizedItems,
    contributors: Mapping[str, Contributor],
    config: ReportConfig,
) -> str:
    """Render the weekly report as a Markdown string.

    Args:
        window: The reporting window, used for the header and footer.
        categorized: Qualifying items bucketed per area section.
        contributors: Contributors keyed by login, in any order.
        config: Static report configuration.

    Returns:
        The full Markdown report, ending with a newline.
    """
    show_other = config.show_uncategorized and bool(categorized.uncategorized)
    total = categorized.total(include_uncategorized=config.show_uncategorized)
    board_link = f"[{config.board_name}]({config.board_url})"

    lines: list[str] = [
        f"# {report_title(window)}",
        "",
        f"> Automated summary of completed items from the {board_link}",
        "",
        "## \U0001F4CA Summary",
        f"- **{total}** items completed",
        f"- **{len(contributors)}** contributors",
        "",
        "---",
        "",
    ]

    rendered: set[str] = set()
    for section in config.sections:
        section_items = categorized.sections.get(section.id, [])
        if not section_items or section.id in rendered:
            continue
        rendered.add(section.id)
        lines.append(f"## {section.title}")
        lines.append(format_badges(section, config))
        lines.append("")
        lines.extend(_item_lines(section_items, config))
        lines.append("")

    if show_other:
        lines.append(f"## {OTHER_SECTION_TITLE}")
        lines.append("")
        lines.extend(_item_lines(categorized.uncategorized, config))
        lines.append("")

    lines.extend([
        "---",
        "",
        "## \U0001F44F Contributors",
        "",
        "Thank you to everyone who contributed this week!",
        "",
    ])
    for login in sorted(contributors):
        lines.append(f"- [@{login}](https://github.com/{login})")

    repo_url = f"https://github.com/{config.canonical_repo}"
    lines.extend([
        "",
        "---",
        "",
        f"<sub>Generated on {window.end_formatted} | "
        f"[Project Board]({config.board_url}) | "
        f"[Report Issue]({repo_url}/issues/new)</sub>",
    ])

    return "\n".join(lines) + "\n"


def format_badges(section: AreaSection, config: ReportConfig) -> str:
    """Build the shields.io label badges shown under a section heading."""
    badges = []
    for label in section.labels:
        badge_text = _encode_uri_component(label.replace("/", "%2F"))
        image = (
            f"https://img.shields.io/badge/{badge_text}-{section.color}"
            f"?style=flat-square"
        )
        target = (
            f"https://github.com/{config.canonical_repo}/labels/"
            f"{_encode_uri_component(label)}"
        )
        badges.append(f"[![{label}]({image})]({target})")
    return " ".join(badges)


def format_item(item: ClassifiedItem, canonical_repo: str) -> str:
    """Render a single qualifying item as Markdown text (without bullet)."""
    content = item.content
    text = ""

    kind = _kind_from_labels(item.labels)
    if kind:
        text += f"{kind}: "

    text += content.title
    text += f" - {content.type_label}: [#{content.number}]({content.url})"

    if content.repository != canonical_repo:
        text += f" ({content.repository})"

    if content.author:
        text += f" - @{content.author}"

    return text


def _item_lines(items: List[ClassifiedItem], config: ReportConfig) -> List[str]:
    return [f"- {format_item(item, config.canonical_repo)}" for item in items]


def _kind_from_labels(labels) -> str:
    """Return the suffix of the first ``kind/`` label, or an empty string."""
    for label in labels:
        if label.startswith("kind/"):
            return label[len("kind/"):]
    return ""


def _encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)

