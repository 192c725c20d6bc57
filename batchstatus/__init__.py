"""
Batch run status tracking.

Persists the lifecycle of long-running batch jobs (start, progress,
completion) in a relational store and prunes their history.
"""

__version__ = "0.1.0"
