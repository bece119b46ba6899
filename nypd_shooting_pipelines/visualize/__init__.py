from .descriptive import build_count_views, count_by_category, count_by_year, run_descriptive_views

__all__ = ["build_count_views", "count_by_category", "count_by_year", "run_descriptive_views"]
