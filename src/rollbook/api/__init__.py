"""HTTP adapter over the student repository."""
