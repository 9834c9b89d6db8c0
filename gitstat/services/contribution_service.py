import logging
from collections.abc import Callable
from datetime import date

import httpx
from pydantic import ValidationError

from gitstat.clients.github_client import fetch_contribution_profile
from gitstat.core.errors import GitHubAPIError
from gitstat.core.errors import InvalidGitHubTokenError
from gitstat.core.errors import NetworkError
from gitstat.core.errors import UserNotFoundError
from gitstat.schemas.contributions import ContributionRecord
from gitstat.schemas.contributions import GitHubUser
from gitstat.services.calendar_service import window_bounds


logger = logging.getLogger(__name__)


def get_user_contributions(
    username: str,
    token: str,
    graphql_url: str,
    window_days: int = 365,
    window_end: date | None = None,
    clock: Callable[[], date] = date.today,
    timeout: float = 20.0,
) -> tuple[GitHubUser, list[ContributionRecord]]:
    """Fetch a user's profile and raw contribution records for the window.

    Raises:
        InvalidWindowError: If `window_days` is not positive.
        InvalidGitHubTokenError: If GitHub rejects the token.
        UserNotFoundError: If the login has no account.
        NetworkError: If GitHub cannot be reached.
        GitHubAPIError: For any other failed or malformed response.
    """

    from_day, to_day = window_bounds(window_days, window_end, clock)

    try:
        profile = fetch_contribution_profile(
            username=username,
            token=token,
            graphql_url=graphql_url,
            from_day=from_day,
            to_day=to_day,
            timeout=timeout,
        )
    except UserNotFoundError:
        raise
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError(
                "GitHub rejected the token. Check the value passed with "
                "--token or the GITHUB_TOKEN environment variable."
            ) from exc
        raise GitHubAPIError(
            f"GitHub API request failed with HTTP {exc.response.status_code}"
        ) from exc
    except httpx.TransportError as exc:
        raise NetworkError(f"Could not reach GitHub: {exc}") from exc
    except Exception as exc:
        raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc

    try:
        user = GitHubUser.model_validate(
            {key: value for key, value in profile.items() if key != "days"}
        )
        records = [
            ContributionRecord.model_validate(item) for item in profile["days"]
        ]
    except ValidationError as exc:
        raise GitHubAPIError("GitHub contribution data is invalid") from exc

    logger.info("Fetched %d contribution days for %s", len(records), user.login)
    return user, records
