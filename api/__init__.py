"""HTTP adapter over the TechWell engines."""
