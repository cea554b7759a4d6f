"""
News Module
===========

A self-contained module for multi-language news ingestion, including:
- Static source catalog grouped by language
- Feed, static-scrape and headless-browser fetch strategies
- Normalization and HTML sanitization
- Dedup-upsert persistence and read-through caching
- Concurrency-bounded background refreshes
"""
