import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx

from gitstat.core.errors import UserNotFoundError


logger = logging.getLogger(__name__)

USER_AGENT = "gitstat-cli"

CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    login
    name
    followers {
      totalCount
    }
    following {
      totalCount
    }
    repositories(privacy: PUBLIC, ownerAffiliations: OWNER) {
      totalCount
    }
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def _total_count(user: Mapping[str, Any], key: str) -> int:
    connection = user.get(key)
    if not isinstance(connection, Mapping):
        return 0
    raw_count = connection.get("totalCount")
    return raw_count if isinstance(raw_count, int) else 0


def fetch_contribution_profile(
    username: str,
    token: str,
    graphql_url: str,
    from_day: date,
    to_day: date,
    timeout: float = 20.0,
) -> dict[str, Any]:
    """Fetch profile fields and contribution days for a user in one GraphQL call.

    Returns a mapping with `login`, `name`, `public_repos`, `followers`,
    `following` and `days`, where `days` is a list of `{"date", "count"}`
    items with ISO date strings.
    """

    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    variables = {
        "login": username,
        "from": f"{from_day.isoformat()}T00:00:00Z",
        "to": f"{to_day.isoformat()}T23:59:59Z",
    }
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }

    logger.debug("Requesting contributions for %s from %s to %s", username, from_day, to_day)
    response = httpx.post(
        graphql_url,
        json={"query": CONTRIBUTIONS_QUERY, "variables": variables},
        headers=headers,
        timeout=timeout,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        if isinstance(errors, list) and any(
            isinstance(error, Mapping) and error.get("type") == "NOT_FOUND"
            for error in errors
        ):
            raise UserNotFoundError(f"User '{username}' not found")
        messages = [
            str(error.get("message"))
            for error in errors
            if isinstance(error, Mapping) and error.get("message")
        ]
        raise ValueError(f"GitHub GraphQL returned errors: {', '.join(messages)}")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise UserNotFoundError(f"User '{username}' not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    days: list[dict[str, str | int]] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if isinstance(raw_date, str) and isinstance(raw_count, int):
                days.append({"date": raw_date, "count": raw_count})

    raw_login = user.get("login")
    raw_name = user.get("name")
    return {
        "login": raw_login if isinstance(raw_login, str) and raw_login else username,
        "name": raw_name if isinstance(raw_name, str) and raw_name else None,
        "public_repos": _total_count(user, "repositories"),
        "followers": _total_count(user, "followers"),
        "following": _total_count(user, "following"),
        "days": days,
    }
