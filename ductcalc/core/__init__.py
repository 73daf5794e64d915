"""Core calculation modules for DuctCalc.

This package contains the duct sizing engine:
- values: Dual-unit (imperial/metric) parameter values
- formulas: Duct geometry, friction and head-loss relations
- parameters: The 13-slot parameter table
- fluids: Air condition and fluid presets
- locks: Overdetermined lock combinations
- engine: Parameter propagation after each edit
- config: Engine settings persistence (JSON)
"""
