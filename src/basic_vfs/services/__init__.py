"""Services operating on namespace trees."""
