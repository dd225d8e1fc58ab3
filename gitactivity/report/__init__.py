# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Activity report engine: repository enumeration, per-repository fetch,
classification and ordering.
"""

from gitactivity.report.activity_report import ActivityReport
from gitactivity.report.classify import classify
from gitactivity.report.ordering import sort_by_activity, sort_by_age

__all__ = ['ActivityReport', 'classify', 'sort_by_activity', 'sort_by_age']
