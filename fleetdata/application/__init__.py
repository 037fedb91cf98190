"""Application layer coordinating domain operations."""
