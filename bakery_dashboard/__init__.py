"""
Bakery Operations Dashboard package

Client-side half of the bakery production dashboard. The forecasting,
scheduling and simulation engines live behind the HTTP API; this package
turns their flat per-record responses into grouped, classified, sorted and
filtered views.

Layers:
- core: configuration
- domain: normalization, aggregation, classification, view state (no Streamlit)
- data_sources: HTTP client and request ordering
- ui: Streamlit rendering helpers
"""

from __future__ import annotations

__version__ = "1.0.0"
