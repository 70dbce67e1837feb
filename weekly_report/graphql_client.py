"""GraphQL client for GitHub API via gh CLI.

Provides query builders, response parsers and executors for the project
board, repository lookup and discussion publishing used by the weekly
report tool. All queries are executed via `gh api graphql`.
"""

import json
import subprocess
import sys
from datetime import datetime
from typing import Optional

from weekly_report.report_data import ItemContent, TrackedItem

STATUS_FIELD = "Status"
CONTENT_TYPES = ("Issue", "PullRequest")
PAGE_SIZE = 100


class GraphQLError(RuntimeError):
    """Raised when GitHub answers with a GraphQL ``errors`` list."""

    def __init__(self, errors: list):
        self.errors = errors
        messages = "; ".join(err.get("message", str(err)) for err in errors)
        super().__init__(f"GraphQL errors: {messages}")


def graphql_query(query: str, variables: Optional[dict] = None) -> dict:
    """Execute a GraphQL query via gh api graphql and return the data dict.

    Args:
        query: The GraphQL query string.
        variables: Optional dict of string variables to pass to the query.
            Entries whose value is None are left out.

    Returns:
        The 'data' dict from the GraphQL response.

    Raises:
        GraphQLError: If the response contains errors.
        RuntimeError: If the gh command fails.
    """
    cmd = ["gh", "api", "graphql", "-f", f"query={query}"]
    if variables:
        for key, value in variables.items():
            if value is None:
                continue
            cmd.extend(["-f", f"{key}={value}"])

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError:
        print("Error: gh CLI is not installed.", file=sys.stderr)
        sys.exit(1)
    except subprocess.CalledProcessError as e:
        raise RuntimeError(
            f"gh api graphql failed:\n{e.stderr}"
        ) from e

    response = json.loads(result.stdout)

    errors = response.get("errors")
    if errors:
        raise GraphQLError(errors)

    return response.get("data", {})


# ---------------------------------------------------------------------------
# Project board items
# ---------------------------------------------------------------------------

_CONTENT_FIELDS = """\
            number
            title
            url
            repository { nameWithOwner }
            author { login }
            labels(first: 20) { nodes { name } }"""


def build_project_items_query() -> str:
    """Build the paginated query for all items on a ProjectV2 board.

    The query takes ``$projectId`` and an optional ``$cursor`` variable.
    """
    return f"""\
query ProjectItems($projectId: ID!, $cursor: String) {{
  node(id: $projectId) {{
    ... on ProjectV2 {{
      items(first: {PAGE_SIZE}, after: $cursor) {{
        pageInfo {{ hasNextPage endCursor }}
        nodes {{
          id
          fieldValues(first: 20) {{
            nodes {{
              ... on ProjectV2ItemFieldSingleSelectValue {{
                name
                field {{ ... on ProjectV2SingleSelectField {{ name }} }}
              }}
              ... on ProjectV2ItemFieldDateValue {{
                date
                field {{ ... on ProjectV2FieldCommon {{ name }} }}
              }}
            }}
          }}
          content {{
            __typename
            ... on Issue {{
{_CONTENT_FIELDS}
            closedAt
            }}
            ... on PullRequest {{
{_CONTENT_FIELDS}
            mergedAt
            closedAt
            }}
          }}
        }}
      }}
    }}
  }}
}}"""


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 GitHub timestamp ('2024-01-05T10:00:00Z')."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _find_status(field_values: list) -> Optional[str]:
    """Return the option name of the Status field, if the item has one."""
    for value in field_values:
        field = (value or {}).get("field") or {}
        if field.get("name") == STATUS_FIELD:
            return value.get("name")
    return None


def parse_item_content(content: dict) -> Optional[ItemContent]:
    """Parse the ``content`` of a board item.

    Returns None for draft issues and for content the token cannot see,
    which GitHub returns as an empty object. Missing fields on a real issue
    or pull request raise KeyError.
    """
    if not content or content.get("__typename") not in CONTENT_TYPES:
        return None

    return ItemContent(
        number=content["number"],
        title=content["title"],
        url=content["url"],
        repository=content["repository"]["nameWithOwner"],
        author=(content.get("author") or {}).get("login"),
        kind=content["__typename"],
        labels=tuple(node["name"] for node in content["labels"]["nodes"]),
        merged_at=_parse_timestamp(content.get("mergedAt")),
        closed_at=_parse_timestamp(content.get("closedAt")),
    )


def parse_tracked_item(node: dict) -> TrackedItem:
    """Parse one node of the ProjectV2 items connection."""
    field_values = (node.get("fieldValues") or {}).get("nodes", [])
    return TrackedItem(
        item_id=node["id"],
        status=_find_status(field_values),
        content=parse_item_content(node.get("content")),
    )


def parse_project_items_response(
    data: dict,
) -> tuple[list[TrackedItem], bool, Optional[str]]:
    """Parse a page of the project items query.

    Args:
        data: The 'data' dict from a build_project_items_query response.

    Returns:
        Tuple of (items, has_next_page, end_cursor).
    """
    connection = data["node"]["items"]
    page_info = connection["pageInfo"]
    items = [parse_tracked_item(node) for node in connection["nodes"]]
    return items, bool(page_info["hasNextPage"]), page_info.get("endCursor")


def fetch_project_items(project_id: str) -> list[TrackedItem]:
    """Fetch every item on a project board, following pagination cursors.

    Items are returned in the order GitHub lists them.
    """
    query = build_project_items_query()
    all_items: list[TrackedItem] = []
    cursor = None
    has_next_page = True

    while has_next_page:
        data = graphql_query(query, {"projectId": project_id, "cursor": cursor})
        items, has_next_page, cursor = parse_project_items_response(data)
        all_items.extend(items)

    return all_items


# ---------------------------------------------------------------------------
# Repository and discussion
# ---------------------------------------------------------------------------


def build_repository_id_query(owner: str, name: str) -> tuple[str, dict]:
    """Build the query resolving a repository's node id.

    Returns:
        Tuple of (query_string, variables_dict).
    """
    query = """\
query RepositoryId($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
  }
}"""
    return query, {"owner": owner, "name": name}


def get_repository_id(owner: str, name: str) -> str:
    """Return the GraphQL node id of ``owner/name``."""
    query, variables = build_repository_id_query(owner, name)
    data = graphql_query(query, variables)
    return data["repository"]["id"]


def build_create_discussion_mutation(
    repository_id: str, category_id: str, title: str, body: str
) -> tuple[str, dict]:
    """Build the createDiscussion mutation.

    Title and body travel as variables so they need no escaping.

    Returns:
        Tuple of (mutation_string, variables_dict).
    """
    mutation = """\
mutation CreateDiscussion(
  $repositoryId: ID!, $categoryId: ID!, $title: String!, $body: String!
) {
  createDiscussion(input: {
    repositoryId: $repositoryId,
    categoryId: $categoryId,
    title: $title,
    body: $body
  }) {
    discussion {
      id
      url
    }
  }
}"""
    variables = {
        "repositoryId": repository_id,
        "categoryId": category_id,
        "title": title,
        "body": body,
    }
    return mutation, variables


def create_discussion(
    repository_id: str, category_id: str, title: str, body: str
) -> dict:
    """Publish a discussion and return its ``{"id", "url"}`` dict."""
    mutation, variables = build_create_discussion_mutation(
        repository_id, category_id, title, body,
    )
    data = graphql_query(mutation, variables)
    return data["createDiscussion"]["discussion"]
