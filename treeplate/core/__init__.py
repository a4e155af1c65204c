"""Core domain types for treeplate."""
