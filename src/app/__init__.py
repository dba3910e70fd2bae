"""Location menu management API."""
