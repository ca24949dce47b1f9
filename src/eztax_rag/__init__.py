"""Knowledge-base assistant for the EzTax filing simulator."""

__version__ = "0.1.0"
