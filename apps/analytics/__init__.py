"""Analytics app package."""
