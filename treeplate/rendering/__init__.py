"""Output tree management and template evaluation."""
