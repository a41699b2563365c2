"""Heuristic classification of scraped discussions."""
