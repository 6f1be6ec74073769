"""
Deterministic material and cost calculation engine.

Plain arithmetic over a registry of calculator definitions. Given the raw
form fields for one calculator type and optional unit prices, produce the
material quantities, itemized costs and a formula-annotated detail record.
"""
