"""DynamoDB persistence. The strategy module is imported lazily by registration."""
