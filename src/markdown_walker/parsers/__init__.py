#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/parsers/__init__.py
"""Markdown parsing package.

- extensions: mistune plugins for the syntax extensions mistune lacks
- markdown: conversion of mistune tokens into an ``Arena`` document tree

Submodules are imported directly (``markdown_walker.parsers.markdown``);
``markdown_walker.options`` depends on ``extensions`` and is in turn a
dependency of ``markdown``.
"""
