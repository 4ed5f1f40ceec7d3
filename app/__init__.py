"""Hand Seals — application layer (settings and logging).

The detection core in `handseal/` never imports from here; the CLI wires
settings into it.
"""
