"""Infrastructure Layer — database sessions, outbound HTTP, logging, detached tasks."""
