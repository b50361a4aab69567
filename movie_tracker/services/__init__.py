"""
Movie Tracker Services Package - movie resolution and user associations.

Core Services:
- catalog_interface & omdb_client: External movie catalog gateway (OMDb)
- movie_resolver: Find-or-create of the canonical local movie per IMDb id
- watchlist_service: Unique user ↔ movie watchlist links
- review_service: Rating validation and owner-only review edits
- listing_service: Joined, ordered read views of watchlists and reviews
"""
