"""HTTP adapter for the issuance engine."""
