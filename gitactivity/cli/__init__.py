# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
GitActivity CLI

Usage:
    gitactivity report <org>       # Activity report for an organization
    gitactivity config             # Show / set CLI defaults
"""
