"""Shared foundation for the geo loader tools."""
