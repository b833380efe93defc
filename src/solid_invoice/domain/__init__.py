"""Domain layer - invoice models and domain exceptions."""
