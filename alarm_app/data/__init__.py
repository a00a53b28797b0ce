"""
Price history ingestion: row parsing, validation and series models.
"""
