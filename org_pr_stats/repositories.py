"""Enumeration of an organization's repositories."""

import logging
from typing import Dict, List, Optional

from .api_client import GitHubAPIClient
from .models import Repository, RepositoryPrivacy
from .queries import REPOSITORIES_QUERY


VISIBILITY_MODES = {
    '': None,
    'all': None,
    'public': RepositoryPrivacy.PUBLIC,
    'private': RepositoryPrivacy.PRIVATE,
}


def resolve_privacy(visibility: Optional[str]) -> Optional[RepositoryPrivacy]:
    """Map a visibility mode (all|public|private) to a privacy filter.

    Unknown values fall back to ``all`` (no filter) with a warning.
    """
    key = (visibility or '').strip().lower()
    if key not in VISIBILITY_MODES:
        logging.warning(f"Unknown visibility '{visibility}', using all")
        return None
    return VISIBILITY_MODES[key]


def _keep(repo: Repository, include_forks: bool, include_archived: bool) -> bool:
    if repo.is_fork and not include_forks:
        return False
    if repo.is_archived and not include_archived:
        return False
    return True


def list_repositories(
    client: GitHubAPIClient,
    org: str,
    include_forks: bool = False,
    include_archived: bool = False,
    visibility: str = 'all',
    max_repos: int = 0
) -> List[str]:
    """List repository names of an organization, ordered by name.

    Args:
        client: GraphQL API client
        org: Organization login
        include_forks: Keep forked repositories
        include_archived: Keep archived repositories
        visibility: all, public or private
        max_repos: Stop after this many repositories passed the filters (0 = no cap)

    Returns:
        Repository names in ascending name order

    Raises:
        GraphQLError: If the API reports errors
        TransportError: If the request fails
    """
    privacy = resolve_privacy(visibility)

    repos: List[str] = []
    cursor: Optional[str] = None
    page = 1

    while True:
        variables: Dict[str, str] = {'org': org}
        if cursor is not None:
            variables['cursor'] = cursor
        if privacy is not None:
            variables['privacy'] = privacy.value

        logging.debug(f"Fetching repository page {page} for {org}")
        data = client.execute(REPOSITORIES_QUERY, variables)

        connection = (data.get('organization') or {}).get('repositories') or {}
        for node in connection.get('nodes') or []:
            repo = Repository.from_node(node)
            if not _keep(repo, include_forks, include_archived):
                logging.debug(f"Skipping {org}/{repo.name} (fork={repo.is_fork}, archived={repo.is_archived})")
                continue

            repos.append(repo.name)
            if max_repos > 0 and len(repos) >= max_repos:
                logging.info(f"Reached repository cap of {max_repos}")
                return repos

        page_info = connection.get('pageInfo') or {}
        if not page_info.get('hasNextPage'):
            break
        cursor = page_info.get('endCursor')
        page += 1

    logging.info(f"Found {len(repos)} repositories in {org}")
    return repos
