"""Security & Pagination Harness API."""
