"""
Analysis Engine Module

Runs the gold price queries over an in-memory price series:
- Average price and yearly averages
- Top 3 highest / lowest prices for a year
- Profitable days over a baseline window
- Second-decile price dates
- Best buy/sell investment period
"""

__version__ = "0.1.0"
