from .client import GitHubAPIError, GitHubClient
from .rate_limit import RequestThrottle
from .retry import RetryPolicy

__all__ = ["GitHubAPIError", "GitHubClient", "RequestThrottle", "RetryPolicy"]
