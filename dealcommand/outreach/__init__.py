"""Seller scripts and buyer-facing dispo marketing copy."""
