"""
GitHub Activity.

- core/: Configuration, logging and exceptions
- schemas/: Typed models for upstream GitHub event records
- cli/: Command-line client (Click + Rich + httpx)
- config/settings/: Bundled YAML settings
"""

__version__ = "1.0.0"
