"""Content preparation layer for weekly-report.

Transforms the qualifying board items into renderer-agnostic structures:

- categorize_items(): buckets items into area sections by label, first
  configured section wins
- extract_contributors(): folds items into per-author contribution lists
- credit_contributors(): contributors for the items a report actually lists

Both keep the order in which the board returned the items.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Sequence, Union

from weekly_report.config import AreaSection
from weekly_report.report_data import (
    UNCATEGORIZED,
    CategorizedItems,
    ClassifiedItem,
    Contribution,
    Contributor,
    TrackedItem,
)

logger = logging.getLogger("weekly_report.content")


def categorize_item(labels: Iterable[str], sections: Sequence[AreaSection]) -> str:
    """Return the id of the first section sharing a label with ``labels``.

    Args:
        labels: Labels on the item.
        sections: Area sections in priority order.

    Returns:
        The matching section id, or UNCATEGORIZED.
    """
    label_set = set(labels)
    for section in sections:
        if label_set.intersection(section.labels):
            return section.id
    return UNCATEGORIZED


def classify_item(item: TrackedItem, sections: Sequence[AreaSection]) -> ClassifiedItem:
    """Attach the resolved label list and section to a qualifying item."""
    content = item.content
    labels = tuple(content.labels)
    return ClassifiedItem(
        content=content,
        labels=labels,
        section=categorize_item(labels, sections),
    )


def categorize_items(
    items: Iterable[TrackedItem],
    sections: Sequence[AreaSection],
) -> CategorizedItems:
    """Bucket qualifying items into area sections.

    Args:
        items: Qualifying items in board order.
        sections: Area sections in priority order.

    Returns:
        CategorizedItems with one (possibly empty) list per section, in
        configuration order, plus the uncategorized overflow list.
    """
    result = CategorizedItems(
        sections={section.id: [] for section in sections},
    )

    for item in items:
        classified = classify_item(item, sections)
        result.items.append(classified)
        if classified.section == UNCATEGORIZED:
            result.uncategorized.append(classified)
        else:
            result.sections[classified.section].append(classified)

    logger.debug(
        "Categorized %d items (%d uncategorized)",
        result.total(), len(result.uncategorized),
    )
    return result


def extract_contributors(
    items: Iterable[Union[TrackedItem, ClassifiedItem]],
) -> Dict[str, Contributor]:
    """Group contributions by author login.

    Items without an author are left out. Logins appear in the order they
    were first seen; sorting is up to the formatter.
    """
    contributors: Dict[str, Contributor] = {}
    for item in items:
        content = item.content
        if content is None or not content.author:
            continue

        contributor = contributors.get(content.author)
        if contributor is None:
            contributor = Contributor(login=content.author)
            contributors[content.author] = contributor

        contributor.contributions.append(Contribution(
            number=content.number,
            title=content.title,
            url=content.url,
            repository=content.repository,
            kind="change" if content.merged_at else "issue",
        ))
    return contributors



def credit_contributors(
    categorized: CategorizedItems,
    include_uncategorized: bool = True,
) -> Dict[str, Contributor]:
    """Credit the authors of the items a report lists.

    When uncategorized items are hidden, their authors are not credited
    for them either.
    """
    return extract_contributors(categorized.listed(include_uncategorized))
