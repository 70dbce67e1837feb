"""Configuration loader for weekly-report.

Reads YAML configuration from ~/.config/weekly-report/config.yaml (or a custom
path) and provides frozen dataclasses for the area sections and the report
settings. Anything missing from the file falls back to the built-in defaults
for the Bluefin project board.

Requires PyYAML (pip install pyyaml).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

import yaml


DEFAULT_CONFIG_PATH = os.path.expanduser("~/.config/weekly-report/config.yaml")
DONE_STATUS = "Done"


@dataclass(frozen=True)
class AreaSection:
    """A report section and the labels that place an item in it."""

    id: str
    title: str
    labels: Tuple[str, ...]
    color: str = "lightgrey"


DEFAULT_SECTIONS: Tuple[AreaSection, ...] = (
    AreaSection(
        id="desktop",
        title="🖥️ Desktop",
        labels=("area/gnome", "area/aurora", "area/bling"),
        color="f5c2e7",
    ),
    AreaSection(
        id="development",
        title="🛠️ Development",
        labels=("area/dx", "area/buildstream", "area/finpilot"),
        color="89dceb",
    ),
    AreaSection(
        id="ecosystem",
        title="📦 Ecosystem",
        labels=("area/brew", "area/just", "area/bluespeed"),
        color="eba0ac",
    ),
    AreaSection(
        id="services",
        title="⚙️ System Services & Policies",
        labels=("area/services", "area/policy"),
        color="b4befe",
    ),
    AreaSection(
        id="infrastructure",
        title="🏗️ Infrastructure",
        labels=("area/iso", "area/upstream"),
        color="94e2d5",
    ),
)


@dataclass(frozen=True)
class ReportConfig:
    """Top-level application configuration, constant for a run."""

    project_id: str = "PVT_kwDOCCE0ds4BLZBC"
    category_id: str = "DIC_kwDOQWkn1c4C1bXC"
    repo_owner: str = "projectbluefin"
    repo_name: str = "common"
    board_url: str = "https://github.com/orgs/projectbluefin/projects/2"
    board_name: str = "Bluefin Project Board"
    done_status: str = DONE_STATUS
    show_uncategorized: bool = True
    sections: Tuple[AreaSection, ...] = field(default=DEFAULT_SECTIONS)

    @property
    def canonical_repo(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"


_STRING_KEYS = (
    "project_id",
    "category_id",
    "repo_owner",
    "repo_name",
    "board_url",
    "board_name",
    "done_status",
)


def _expand_path(path: str) -> str:
    """Expand ~ and environment variables in a path."""
    return os.path.expanduser(os.path.expandvars(path))


def _validate_section(raw: dict) -> Optional[AreaSection]:
    """Validate and build an AreaSection from a raw YAML dict entry.

    Returns:
        An AreaSection, or None if the entry has no id or no labels.
    """
    if not isinstance(raw, dict):
        return None

    section_id = raw.get("id", "")
    labels = raw.get("labels", [])
    if not section_id or not isinstance(labels, list) or not labels:
        return None

    return AreaSection(
        id=str(section_id),
        title=str(raw.get("title") or section_id),
        labels=tuple(str(label) for label in labels),
        color=str(raw.get("color") or "lightgrey"),
    )


def load_config(config_path: Optional[str] = None) -> ReportConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file. Defaults to
            ~/.config/weekly-report/config.yaml.

    Returns:
        A ReportConfig instance. If the config file does not exist, returns
        the built-in defaults.
    """
    path = _expand_path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not os.path.isfile(path):
        return ReportConfig()

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        return ReportConfig()

    overrides: dict = {}
    for key in _STRING_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            overrides[key] = value

    show_uncategorized = data.get("show_uncategorized")
    if isinstance(show_uncategorized, bool):
        overrides["show_uncategorized"] = show_uncategorized

    raw_sections = data.get("sections")
    if isinstance(raw_sections, list):
        sections = []
        seen_ids = set()
        for raw in raw_sections:
            section = _validate_section(raw)
            if section is None or section.id in seen_ids:
                continue
            seen_ids.add(section.id)
            sections.append(section)
        if sections:
            overrides["sections"] = tuple(sections)

    return replace(ReportConfig(), **overrides)
