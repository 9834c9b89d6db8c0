from gitstat.core.errors import MissingGitHubTokenError
from gitstat.settings import Settings


TOKEN_HELP = (
    "GitHub token required. Pass it with --token YOUR_TOKEN or set the "
    "GITHUB_TOKEN environment variable. Create one at "
    "https://github.com/settings/tokens (only 'read:user' is needed)."
)


def resolve_token(flag_token: str | None, app_settings: Settings) -> str:
    """Pick the GitHub token, preferring the command line over the environment.

    Raises:
        MissingGitHubTokenError: If neither source provides a non-empty token.
    """

    for candidate in (flag_token, app_settings.github_token):
        if candidate and candidate.strip():
            return candidate.strip()

    raise MissingGitHubTokenError(TOKEN_HELP)
