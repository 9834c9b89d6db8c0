class GitStatError(Exception):
    """Base class for fatal errors surfaced to the command line."""


class InvalidWindowError(GitStatError):
    """Raised when a non-positive calendar window is requested."""


class AuthenticationError(GitStatError):
    """Raised when no usable GitHub credential is available."""


class MissingGitHubTokenError(AuthenticationError):
    """Raised when neither --token nor GITHUB_TOKEN provides a token."""


class InvalidGitHubTokenError(AuthenticationError):
    """Raised when GitHub rejects the provided token."""


class UserNotFoundError(GitStatError):
    """Raised when the requested login has no GitHub account."""


class NetworkError(GitStatError):
    """Raised when GitHub cannot be reached."""


class GitHubAPIError(GitStatError):
    """Raised when GitHub requests fail for non-auth reasons."""
