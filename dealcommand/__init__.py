"""DealCommand - wholesale real estate deal engine."""
