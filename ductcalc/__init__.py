"""DuctCalc — HVAC duct sizing with linked imperial/metric parameters."""

__app_name__ = "ductcalc"
__version__ = "0.1.0"
