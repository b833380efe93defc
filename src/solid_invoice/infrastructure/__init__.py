"""Infrastructure layer - registry, persistence strategies and logging."""
