"""
Unit Tests for ChessBot

This package contains unit tests for all chess bot components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_search.py

    # Run with coverage
    pytest tests/ --cov=chessbot --cov-report=html

    # Run specific test
    pytest tests/test_analysis.py::TestBands

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
