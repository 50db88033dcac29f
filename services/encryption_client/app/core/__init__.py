"""Core schemas for the encryption client."""
