"""GraphQL documents used by the repository enumerator and PR aggregator."""

PAGE_SIZE = 100

REPOSITORIES_QUERY = """
query($org: String!, $cursor: String, $privacy: RepositoryPrivacy) {
  organization(login: $org) {
    repositories(
      first: 100,
      after: $cursor,
      orderBy: {field: NAME, direction: ASC},
      privacy: $privacy
    ) {
      pageInfo { hasNextPage endCursor }
      nodes { name isFork isArchived isPrivate }
    }
  }
}
"""

PULL_REQUESTS_QUERY = """
query($owner: String!, $name: String!, $base: String!, $cursor: String) {
  repository(owner: $owner, name: $name) {
    pullRequests(
      first: 100
      after: $cursor
      states: MERGED
      orderBy: {field: UPDATED_AT, direction: DESC}
      baseRefName: $base
    ) {
      pageInfo { hasNextPage endCursor }
      nodes {
        number
        mergedAt
        additions
        deletions
        baseRefName
        author { login }
      }
    }
  }
}
"""
