"""
Template tags package for activities app.

Provides custom template tags and filters for activity display:
- status_class: Return CSS class for a status
- category_class: Return CSS class for a category
- format_update_time: Format an update timestamp with relative day
- display_name: Name shown for an update author
"""
