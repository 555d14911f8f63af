"""popmap package initializer.

This package contains the data pipeline behind the population map Shiny
application.  Modules include schema discovery, the country join index,
filtering, aggregation, visual encoding, trend extraction, data loading
and plotting helpers.  See individual module docstrings for details.
"""
