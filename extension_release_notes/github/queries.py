"""GraphQL documents used to query pull requests and their commits."""

PULL_REQUEST_COMMITS_QUERY = """
query($owner: String!, $name: String!, $number: Int!, $pageSize: Int!, $cursor: String) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $number) {
      commits(first: $pageSize, after: $cursor) {
        pageInfo {
          hasNextPage
          endCursor
        }
        nodes {
          commit {
            oid
          }
        }
      }
    }
  }
}
"""

_PULL_REQUEST_FIELDS = """
      ... on PullRequest {
        number
        title
        body
        url
        headRefName
        mergeCommit {
          oid
        }
      }
"""

SEARCH_PULL_REQUESTS_QUERY = (
    """
query($query: String!) {
  search(query: $query, type: ISSUE, first: 100) {
    nodes {"""
    + _PULL_REQUEST_FIELDS
    + """    }
  }
}
"""
)

SEARCH_RECENT_PULL_REQUESTS_QUERY = (
    """
query($query: String!, $limit: Int!) {
  search(query: $query, type: ISSUE, first: $limit) {
    nodes {"""
    + _PULL_REQUEST_FIELDS
    + """    }
  }
}
"""
)
