"""
Core upload logic.

This module is framework-agnostic - it doesn't import FastAPI or the
Google client libraries. The Drive client arrives through a provider
callable, so the upload flow can be tested with in-memory fakes.
"""
