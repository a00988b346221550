"""End-to-end use case tests against in-memory repositories."""
