"""
Ingestion — fetching, chunking, embedding and indexing web pages.

This module turns a URL into uniquely identified, deduplicated, embedded
chunks stored in the vector database.  Re-ingesting a URL replaces its
previous records.
"""
