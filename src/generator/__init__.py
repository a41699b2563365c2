"""Report, JSON and RSS output for analyzed discussions."""
