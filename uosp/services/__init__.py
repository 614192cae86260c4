"""Services: package layout, packaging tools and workflows."""
