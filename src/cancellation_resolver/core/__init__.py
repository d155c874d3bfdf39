"""Core data types and exceptions shared by every pipeline stage."""
