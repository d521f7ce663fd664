"""
Serving — FastAPI application for ingestion and question answering.

This module exposes the ingestion and retrieval orchestrators over HTTP
so they can be deployed as a standalone container.
"""
