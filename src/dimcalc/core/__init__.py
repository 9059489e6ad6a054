"""Core evaluation pipeline: units, conversions, config, parsing and evaluation."""
