"""Service layer for tasktrack.

Services orchestrate repositories: configuration loading, migrations
between backends, and system initialization.
"""
