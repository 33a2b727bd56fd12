"""In-memory product assortment with type filtering and relevance ranking."""
