"""Host-side protocol libraries."""
