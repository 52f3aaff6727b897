"""In-memory engine and process models backing the test-suite."""
