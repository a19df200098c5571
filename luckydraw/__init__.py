"""Fair lucky-draw ordering for a roster grouped by level and room."""
