"""Services — orchestration between routes, reference data, and the fact store."""
