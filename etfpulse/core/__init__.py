"""etfpulse core: sources, reconciliation pipeline and ambient infrastructure."""
