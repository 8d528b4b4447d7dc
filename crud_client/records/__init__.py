"""Record model, HTTP client and service."""
