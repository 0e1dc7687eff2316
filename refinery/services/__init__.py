"""Services: orchestration between the API and the pure core (logging lives here)."""
