"""Services layer for catalog ingestion.

Services implement business logic and orchestrate data operations.
Organized by feature:
- ingest: spreadsheet-driven bulk ingestion of channels, sections and episodes
"""
