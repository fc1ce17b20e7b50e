"""Domain routers for API v1: accounts, session and notes."""
