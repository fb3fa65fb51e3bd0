"""Riot API access: routing, rate limiting, dispatch and the TFT endpoints."""
