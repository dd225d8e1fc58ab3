# The MIT License (MIT)
# Copyright © 2025 Entrius

# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = "https://api.github.com"
GITHUB_GRAPHQL_URL = f"{BASE_GITHUB_API_URL}/graphql"
DEFAULT_REQUEST_TIMEOUT = 30  # seconds

# GitHub GraphQL timestamps, always UTC
ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# =============================================================================
# Pagination
# =============================================================================
REPOSITORIES_PAGE_SIZE = 50
REPOSITORIES_SAMPLE_SIZE = 10  # single page, used for quick / dry runs
REPORT_PAGE_SIZE = 50  # merged PRs, open PRs, branches and commits per branch

# =============================================================================
# Rate Limit
# =============================================================================
RATE_LIMIT_MIN_REMAINING = 100  # points left before a warning is logged

# =============================================================================
# Report
# =============================================================================
DEFAULT_WINDOW_DAYS = 7
