"""Services backing the reservation form."""
