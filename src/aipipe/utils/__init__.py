"""Small helpers shared by the pipeline and the API layer."""
