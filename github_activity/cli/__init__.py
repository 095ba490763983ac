"""
CLI Client Module.

Command-line client that fetches a user's public GitHub events and prints
them as colorized lines or raw JSON.

Architecture:
- options.py resolves the raw argument tokens (no network access)
- client.py issues the single GET request (httpx)
- formatter.py filters, limits and renders (Rich)
- main.py wires them together behind a Click command

Usage:
    github-activity --help
    github-activity torvalds
    github-activity torvalds --type=PushEvent --limit=5
    github-activity torvalds --json
"""
