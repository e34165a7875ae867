"""Core filtering pipeline: predicates, the paginated processor and enrichment."""
