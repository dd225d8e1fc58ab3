# The MIT License (MIT)
# Copyright © 2025 Entrius

import os

from gitactivity.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_WINDOW_DAYS, GITHUB_GRAPHQL_URL

# optional env overrides
GRAPHQL_URL = os.getenv('GITACTIVITY_GRAPHQL_URL', GITHUB_GRAPHQL_URL)
REQUEST_TIMEOUT = int(os.getenv('GITACTIVITY_REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT))
WINDOW_DAYS = int(os.getenv('GITACTIVITY_WINDOW_DAYS', DEFAULT_WINDOW_DAYS))

# token lookup for the CLI
GITHUB_TOKEN_ENV = 'GITHUB_TOKEN'
