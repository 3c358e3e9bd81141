"""Reference data ingestion.

This module reads delimited plan, ZIP, and target tables from disk.
It builds the immutable lookups the resolver consumes.
"""
