#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/conftest.py
"""Pytest configuration and shared fixtures for the markdown_walker test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from markdown_walker import Arena, MarkdownWalker, NodeKind, has_payload

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


def _make_recorder(kind):
    if has_payload(kind):

        def handler(self, node, payload):
            self.events.append((kind, payload))

    else:

        def handler(self, node):
            self.events.append((kind, None))

    return handler


class RecordingWalker(MarkdownWalker):
    """Walker recording ``(kind, payload)`` for every handler call, in order."""

    def __init__(self):
        self.events = []

    @property
    def kinds(self):
        return [kind for kind, _ in self.events]


for _kind in NodeKind:
    setattr(RecordingWalker, _kind.handler_name, _make_recorder(_kind))


@pytest.fixture
def arena():
    """Provide an empty node store."""
    return Arena()


@pytest.fixture
def recording_walker_cls():
    """Provide the walker class recording every handler call."""
    return RecordingWalker
