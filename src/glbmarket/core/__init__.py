"""Core domain logic: exceptions and page view models."""
