"""
Benchmark suite for medea parsing and encoding performance.

Compares medea against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed, encoding speed and memory usage across document
shapes that stress different grammar productions.
"""
