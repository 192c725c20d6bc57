"""Core domain logic: exceptions and batch progress agents."""
