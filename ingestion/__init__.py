"""
Data Ingestion Module

Turns provider price rows into canonical records:
- {date, price} dicts or (date, price) pairs
- NBP gold price rows ({data, cena})
"""

__version__ = "0.1.0"
