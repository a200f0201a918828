"""Feature modules of the darts player catalog API."""
