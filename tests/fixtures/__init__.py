"""
Test Fixtures - Shared Test Data and Collaborators.

This package contains reusable test fixtures:
    - records: Sample grant/application full-text XML builders
    - fakes: In-memory downloader, record cursor, evaluator and sink

Usage:
    Import fixtures in test files via pytest fixtures or direct import.
"""
