"""
Pytest configuration and shared fixtures for Asymptote tests.
"""
import os

# Keep developer shells from changing analyser behaviour under test.
for _name in (
    "ASYMPTOTE_SNIPPET_MAX_LENGTH",
    "ASYMPTOTE_FALLBACK_ON_SYNTAX_ERROR",
    "ASYMPTOTE_LOG_LEVEL",
):
    os.environ.pop(_name, None)
