#!/usr/bin/env python3
"""Weekly status report generator for a GitHub project board.

Pipeline:
  1. Resolve the trailing 7-day reporting window
  2. Fetch every board item via GraphQL
  3. Keep items marked Done and merged/closed inside the window
  4. Bucket them by area label and credit their authors
  5. Render Markdown and publish it as a GitHub Discussion

Nothing is published when no items were completed in the window.
"""

import argparse
import json
import logging
import sys

from weekly_report.classify import select_completed
from weekly_report.config import load_config
from weekly_report.content import categorize_items, credit_contributors
from weekly_report.format_markdown import format_markdown, report_title
from weekly_report.graphql_client import (
    GraphQLError,
    create_discussion,
    fetch_project_items,
    get_repository_id,
)
from weekly_report.window import resolve_window


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate the weekly status report from a GitHub project board",
    )
    parser.add_argument("--config", dest="config_path", default=None, help="path to YAML config file (default: ~/.config/weekly-report/config.yaml)")
    parser.add_argument(
        "--dry-run", dest="dry_run", action="store_true", default=False,
        help="print the report without posting it to GitHub Discussions",
    )
    parser.add_argument(
        "--output", dest="output_path", default=None,
        help="also write the Markdown report to this file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False,
        help="log why items were skipped or how they were categorized",
    )
    return parser.parse_args(argv)


def run(args) -> int:
    """Run the report pipeline. Collaborator errors propagate to the caller."""
    cfg = load_config(args.config_path)

    print("Generating weekly status report...", file=sys.stderr)

    window = resolve_window()
    print(
        f"Date range: {window.start_formatted} - {window.end_formatted}",
        file=sys.stderr,
    )

    repository_id = None
    if not args.dry_run:
        print("Fetching repository ID...", file=sys.stderr)
        repository_id = get_repository_id(cfg.repo_owner, cfg.repo_name)

    print("Fetching completed items from project board...", file=sys.stderr)
    board_items = fetch_project_items(cfg.project_id)
    items = select_completed(board_items, window, cfg.done_status)
    print(f"Found {len(items)} completed items", file=sys.stderr)

    if not items:
        print("No completed items found. Skipping report generation.", file=sys.stderr)
        return 0

    categorized = categorize_items(items, cfg.sections)

    print("Extracting contributors...", file=sys.stderr)
    contributors = credit_contributors(categorized, cfg.show_uncategorized)
    print(f"Found {len(contributors)} contributors", file=sys.stderr)

    print("Generating report...", file=sys.stderr)
    report = format_markdown(window, categorized, contributors, cfg)
    print(report)

    if args.output_path:
        with open(args.output_path, "w", encoding="utf-8") as f:
            f.write(report)
        print(f"Report written to {args.output_path}", file=sys.stderr)

    if args.dry_run:
        print("Dry run: not posting to GitHub Discussions.", file=sys.stderr)
        return 0

    print("Posting to GitHub Discussions...", file=sys.stderr)
    discussion = create_discussion(
        repository_id, cfg.category_id, report_title(window), report,
    )
    print("Report posted successfully!", file=sys.stderr)
    print(f"URL: {discussion['url']}", file=sys.stderr)
    return 0


def main(argv=None):
    args = _parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        exit_code = run(args)
    except Exception as e:
        print(f"Error generating report: {e}", file=sys.stderr)
        if isinstance(e, GraphQLError):
            print(
                f"GraphQL errors: {json.dumps(e.errors, indent=2)}",
                file=sys.stderr,
            )
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
