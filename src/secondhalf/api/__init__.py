"""
FastAPI prediction service for SecondHalf.

Exposes an endpoint to predict second-half bets for posted first-half
statistics.
"""
