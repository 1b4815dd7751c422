"""GitHub GraphQL API client with retry logic."""

import json
import time
import logging
from typing import Any, Dict, List, Optional
import requests


GRAPHQL_ENDPOINT = "https://api.github.com/graphql"

# Linear backoff bases in seconds, multiplied by the attempt number
NETWORK_BACKOFF = 0.3
SERVER_BACKOFF = 0.5


class TransportError(Exception):
    """Raised when a request could not be completed."""


class AuthenticationError(TransportError):
    """Raised on 401/403 responses (bad credentials or exhausted rate limit)."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"auth/rate error {status_code}: {body}")
        self.status_code = status_code


class GraphQLError(Exception):
    """Raised when a response carries a non-empty GraphQL ``errors`` array."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = messages


class AggregationError(Exception):
    """Raised when aggregating one repository/branch fails."""


class GitHubAPIClient:
    """Handles GitHub GraphQL requests with bearer auth and retries."""

    def __init__(self, token: str, endpoint: str = GRAPHQL_ENDPOINT,
                 timeout: float = 30, max_attempts: int = 5):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            endpoint: GraphQL endpoint URL
            timeout: Per-request timeout in seconds
            max_attempts: Attempts before a transient failure becomes fatal
        """
        self.token = token
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_attempts = max_attempts

        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {self.token}',
            'Accept': 'application/vnd.github+json',
            'Content-Type': 'application/json'
        })
        logging.debug(f"Initialized GitHub API client for {self.endpoint}")

    def post_graphql_raw(self, query: str, variables: Optional[Dict[str, Any]] = None) -> bytes:
        """POST a query document and return the raw response body.

        Network errors and 5xx responses are retried with a linear backoff,
        401/403 fail immediately. The GraphQL ``errors`` array is not inspected.

        Args:
            query: GraphQL query string
            variables: Query variables; absent optional variables are simply omitted

        Returns:
            Raw response body

        Raises:
            AuthenticationError: On 401/403
            TransportError: When all attempts failed
        """
        payload = {"query": query, "variables": variables or {}}
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
            except requests.RequestException as e:
                last_error = e
                delay = NETWORK_BACKOFF * attempt
                logging.warning(f"Request error (attempt {attempt}/{self.max_attempts}): {e}; "
                                f"retrying in {delay:.1f}s")
                time.sleep(delay)
                continue

            if 500 <= response.status_code <= 599:
                last_error = TransportError(f"server {response.status_code}: {response.text}")
                delay = SERVER_BACKOFF * attempt
                logging.warning(f"Server error {response.status_code} (attempt {attempt}/{self.max_attempts}); "
                                f"retrying in {delay:.1f}s")
                time.sleep(delay)
                continue

            if response.status_code in (401, 403):
                raise AuthenticationError(response.status_code, response.text)

            return response.content

        raise TransportError(f"request failed after {self.max_attempts} attempts: {last_error}") from last_error

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            TransportError: If the body is not a JSON object
            GraphQLError: If the response carries errors
        """
        body = self.post_graphql_raw(query, variables)
        try:
            result = json.loads(body)
        except ValueError as e:
            raise TransportError(f"invalid JSON response: {e}") from e
        if not isinstance(result, dict):
            raise TransportError(f"unexpected response body: {body[:200]!r}")

        errors = result.get("errors") or []
        if errors:
            raise GraphQLError([e.get("message", "") for e in errors])

        return result.get("data") or {}

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> 'GitHubAPIClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
