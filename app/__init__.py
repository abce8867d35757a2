"""Chargeback webhook mapper service package."""
