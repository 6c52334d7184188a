"""
Integration Tests - End-to-End Pipeline Tests.

These tests run the real reader, evaluators and sinks over bulk archives
built on disk, with LocalArchiveDownloader standing in for the network.

Test Files:
    - test_end_to_end.py: Full corpus run through the pipeline
    - test_cli.py: Command-line runs over a local archive directory
"""
