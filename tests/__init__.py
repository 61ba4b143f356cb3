"""
Unit Tests for Chess Capture

This package contains unit tests for all chess_capture components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_fen.py

    # Run with coverage
    pytest tests/ --cov=chess_capture --cov-report=html

    # Run specific test
    pytest tests/test_fen.py::TestEncode::test_starting_position

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
