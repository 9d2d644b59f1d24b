"""
Watchlist Board - Source Package

This package contains the core functionality for the watchlist board:
- board_model: Categorized board and its add/update/delete/import mutations
- reorder_engine: Drag gesture to board mutation
- view_projection: Type filters and display helpers
- catalog_adapters: iTunes and TVmaze search calls and normalization
- search_aggregator: Concurrent multi-provider search with dedupe and last-query-wins
- watchlist_io: JSON import/export and tabular overview
- watchlist_utils: Configuration constants and shared helpers
"""
