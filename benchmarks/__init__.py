"""
Benchmark suite for jzonl JSON Lines parsing performance.

Compares jzonl against per-line parsing with standard JSON libraries:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed, serialization speed and memory usage across
different record shapes.
"""
