"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with fake or mocked collaborators.
Unit tests should be fast, deterministic, and offline.

Test Files:
    - test_corpus_pipeline.py: Drain loop, failure isolation, lifecycle
    - test_archive_queue.py: Queue shaping
    - test_classification.py: CPC/USPC parsing and matching
    - test_dump_reader.py: Record splitting of bulk files
    - test_bulk_downloader.py: Index discovery and downloads (mocked HTTP)
    - test_config_loader.py: Configuration loading/validation
"""
