"""NutriScan API: nutrition label analysis and chat."""
