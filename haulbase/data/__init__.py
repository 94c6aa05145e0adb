"""Data models for the haulbase client."""
